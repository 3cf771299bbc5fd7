"""
core/navigation/filtering.py - 항목 필터 엔진

필터 텍스트가 비어 있으면 전체 목록의 복사본을,
아니면 리소스의 name/id 필드에 대소문자 무시 부분 문자열 검색을 적용합니다.
"""

import json
from typing import Any, List, Optional

from core.catalog.extract import extract_value
from core.catalog.types import ResourceDef


def _canonical(item: Any) -> str:
    return json.dumps(item, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def matches(item: Any, needle: str, resource: Optional[ResourceDef]) -> bool:
    """소문자 needle이 항목에 포함되는지 확인"""
    if resource is None:
        return needle in _canonical(item).lower()
    name = extract_value(item, resource.name_field).lower()
    item_id = extract_value(item, resource.id_field).lower()
    return needle in name or needle in item_id


def filter_items(items: List[Any], filter_text: str, resource: Optional[ResourceDef]) -> List[Any]:
    """필터 적용

    Args:
        items: 전체 항목
        filter_text: 필터 문자열
        resource: 현재 리소스 정의 (None이면 항목 전체 문자열에서 검색)

    Returns:
        필터링된 새 목록
    """
    needle = filter_text.lower()
    if not needle:
        return list(items)
    return [item for item in items if matches(item, needle, resource)]


def clamp_selection(selected: int, length: int) -> int:
    """선택 인덱스를 [0, length) 범위로 보정 (빈 목록이면 0)"""
    if length <= 0:
        return 0
    return min(max(selected, 0), length - 1)
