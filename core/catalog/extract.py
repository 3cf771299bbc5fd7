"""
core/catalog/extract.py - 관대한(tolerant) 경로 추출

API 항목은 고정 스키마가 없는 JSON 트리이므로,
모든 필드 접근은 실패 대신 센티널 "-"를 반환하는 이 모듈을 거칩니다.

경로 해석 순서:
    1. 최상위 키 직접 접근 ("status")
    2. 점/대괄호 표기를 JSON 포인터로 변환
       ("networkInterfaces[0].accessConfigs[0].natIP"
        → "/networkInterfaces/0/accessConfigs/0/natIP")
    3. "labels.<key>" 규칙 (키에 점이 포함된 라벨)
    4. 모두 실패하면 "-"
"""

from typing import Any

NOT_FOUND = "-"

_MISSING = object()

# 마지막 경로 세그먼트만 표시할 URL 형태 문자열 접두사
_URL_PREFIXES = ("https://www.googleapis.com/", "projects/")


def _parse_index(token: str) -> int:
    """JSON 포인터 배열 인덱스 파싱 ("+1", "01" 거부)"""
    if not token.isdigit() or (token.startswith("0") and len(token) != 1):
        return -1
    return int(token)


def resolve_pointer(value: Any, pointer: str) -> Any:
    """RFC 6901 JSON 포인터로 값을 찾습니다.

    Args:
        value: JSON 트리
        pointer: "/a/0/b" 형식 포인터 ("" 이면 전체)

    Returns:
        찾은 값, 없으면 내부 센티널 (is_missing()으로 판별)
    """
    if pointer == "":
        return value
    if not pointer.startswith("/"):
        return _MISSING

    current = value
    for raw in pointer[1:].split("/"):
        token = raw.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict):
            if token not in current:
                return _MISSING
            current = current[token]
        elif isinstance(current, list):
            index = _parse_index(token)
            if index < 0 or index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def is_missing(value: Any) -> bool:
    return value is _MISSING


def path_to_pointer(path: str) -> str:
    """점/대괄호 경로를 JSON 포인터로 변환"""
    return "/" + path.replace(".", "/").replace("[", "/").replace("]", "")


def format_value(value: Any) -> str:
    """JSON 값을 표시용 문자열로 변환

    - GCP 리소스 URL/경로 문자열은 마지막 세그먼트만
    - null, 빈 배열은 "-"
    - 배열은 "[N items]", 객체는 "[object]"
    """
    if isinstance(value, str):
        if value.startswith(_URL_PREFIXES):
            return value.rsplit("/", 1)[-1]
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if value is None:
        return NOT_FOUND
    if isinstance(value, list):
        return f"[{len(value)} items]" if value else NOT_FOUND
    if isinstance(value, dict):
        return "[object]"
    return str(value)


def extract_value(item: Any, path: str) -> str:
    """항목에서 경로에 해당하는 값을 표시용 문자열로 추출

    Args:
        item: API 항목 (JSON 트리)
        path: 점/대괄호 경로

    Returns:
        포맷된 문자열, 찾지 못하면 NOT_FOUND ("-")
    """
    if isinstance(item, dict) and path in item:
        return format_value(item[path])

    found = resolve_pointer(item, path_to_pointer(path))
    if not is_missing(found):
        return format_value(found)

    if path.startswith("labels.") and isinstance(item, dict):
        labels = item.get("labels")
        tag_key = path[len("labels.") :]
        if isinstance(labels, dict) and tag_key in labels:
            return format_value(labels[tag_key])

    return NOT_FOUND
