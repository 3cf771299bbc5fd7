"""
core/gcp/dispatch.py - 리소스 정의 기반 REST 디스패치

리소스 정의 + 클라이언트 컨텍스트(+ 선택적 부모 항목)를
실제 REST 호출로 바꾸고 결과 목록을 추출합니다.

URL 보간 순서:
    1. base + "/" + path
    2. {project}, {zone}, {region} (클라이언트 컨텍스트)
    3. 추가 플레이스홀더 (정확한 {key} 일치)

응답 추출 (response_path):
    - ""              : 응답 자체 (배열이 아니면 1개짜리 목록)
    - "items.*.field" : 집계(aggregated) 응답. items 맵의 모든 값에서 field 배열을 이어붙임
    - 그 외           : "a.b" → "/a/b" 포인터, 배열이 아니면 빈 목록
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from core.catalog.extract import is_missing, resolve_pointer
from core.catalog.types import ResourceDef
from core.exceptions import ActionIndexOutOfRangeError

from .client import GcpClient, derive_region

logger = logging.getLogger(__name__)

AGGREGATE_MARKER = ".*"

# 부모 항목의 name 값을 그대로 채워 넣는 플레이스홀더들.
# 경로 템플릿이 실제로 참조하는 것만 치환된다.
PARENT_NAME_PLACEHOLDERS = ("secret", "parent", "cluster", "instance", "topic", "service")


def interpolate_url(
    base: str,
    path: str,
    client: GcpClient,
    extra: Optional[Mapping[str, str]] = None,
) -> str:
    """URL 템플릿의 플레이스홀더 치환

    클라이언트 컨텍스트({project}, {zone}, {region})가 먼저 치환되므로
    extra의 zone/region 값은 이미 치환된 템플릿에는 영향을 주지 않습니다.
    """
    url = f"{base.rstrip('/')}/{path.lstrip('/')}"
    url = (
        url.replace("{project}", client.project)
        .replace("{zone}", client.zone)
        .replace("{region}", derive_region(client.zone))
    )
    for key, value in (extra or {}).items():
        url = url.replace("{" + key + "}", value)
    return url


def parent_placeholders(parent_item: Any) -> Dict[str, str]:
    """부모 항목에서 하위 리소스 요청용 플레이스홀더 생성"""
    extra: Dict[str, str] = {}
    if not isinstance(parent_item, dict):
        return extra

    name = parent_item.get("name")
    if isinstance(name, str):
        for key in PARENT_NAME_PLACEHOLDERS:
            extra[key] = name

    location = parent_item.get("location")
    if isinstance(location, str):
        extra["location"] = location
    return extra


def extract_items(response: Any, response_path: str) -> List[Any]:
    """응답에서 항목 목록 추출"""
    if not response_path:
        return list(response) if isinstance(response, list) else [response]

    if AGGREGATE_MARKER in response_path:
        return _extract_aggregated(response, response_path)

    found = resolve_pointer(response, "/" + response_path.replace(".", "/"))
    if is_missing(found) or not isinstance(found, list):
        return []
    return list(found)


def _extract_aggregated(response: Any, response_path: str) -> List[Any]:
    """집계 응답 추출 ("items.*.subnetworks")

    맵 키(리전/존) 간 순서는 보장하지 않습니다.
    """
    parts = response_path.split(".*.")
    if len(parts) != 2:
        return []
    map_field, array_field = parts

    mapping = response.get(map_field) if isinstance(response, dict) else None
    if not isinstance(mapping, dict):
        return []

    items: List[Any] = []
    for scoped in mapping.values():
        found = scoped.get(array_field) if isinstance(scoped, dict) else None
        if isinstance(found, list):
            items.extend(found)
    return items


def list_resources(
    client: GcpClient,
    resource: ResourceDef,
    parent_item: Optional[Any] = None,
) -> List[Any]:
    """리소스 목록 조회

    Args:
        client: GCP 클라이언트
        resource: 리소스 정의
        parent_item: 하위 리소스일 때 드릴다운 시점의 부모 항목

    Returns:
        항목 목록

    Raises:
        UpstreamRequestError: 2xx 이외의 응답
    """
    extra = parent_placeholders(parent_item) if parent_item is not None else None
    url = interpolate_url(resource.api.base, resource.api.path, client, extra)
    logger.debug("Listing resources: %s -> %s", resource.display_name, url)

    response = client.request(resource.api.method, url)
    items = extract_items(response, resource.response_path)

    logger.info("Listed %d %s items", len(items), resource.display_name)
    return items


def _last_segment(value: str) -> str:
    return value.rsplit("/", 1)[-1]


def action_placeholders(resource: ResourceDef, item: Any) -> Dict[str, str]:
    """액션 대상 항목에서 플레이스홀더 생성 (name, id, zone, region)"""
    extra: Dict[str, str] = {}
    if not isinstance(item, dict):
        return extra

    name = item.get(resource.name_field)
    if isinstance(name, str):
        extra["name"] = name
    item_id = item.get(resource.id_field)
    if isinstance(item_id, str):
        extra["id"] = item_id

    # 존/리전 URL은 마지막 세그먼트만 사용
    for key in ("zone", "region"):
        value = item.get(key)
        if isinstance(value, str):
            extra[key] = _last_segment(value)
    return extra


def execute_action(
    client: GcpClient,
    resource: ResourceDef,
    action_index: int,
    item: Any,
) -> Any:
    """항목 단위 액션 실행

    Raises:
        ActionIndexOutOfRangeError: 잘못된 액션 인덱스
        UpstreamRequestError: 2xx 이외의 응답
    """
    if not 0 <= action_index < len(resource.actions):
        raise ActionIndexOutOfRangeError(action_index, resource.display_name)
    action = resource.actions[action_index]

    logger.info("Executing action '%s' on %s", action.display_name, resource.display_name)
    extra = action_placeholders(resource, item)
    if "name" in extra:
        logger.debug("Action target name: %s", extra["name"])

    url = interpolate_url(resource.api.base, action.path, client, extra)
    logger.debug("Action URL: %s %s", action.method, url)
    return client.request(action.method, url)
