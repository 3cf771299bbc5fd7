"""
core/catalog - 선언형 리소스 카탈로그

리소스 정의 타입, JSON 문서 로더, 관대한 경로 추출 함수를 제공합니다.
"""

from .extract import NOT_FOUND, extract_value, format_value
from .loader import BUILTIN_DOCUMENTS, META_COMMANDS, Catalog
from .types import (
    ActionDef,
    ApiDef,
    ColorDef,
    ColumnDef,
    ConfirmDef,
    ResourceDef,
    SubResourceDef,
)

__all__ = [
    "Catalog",
    "BUILTIN_DOCUMENTS",
    "META_COMMANDS",
    "NOT_FOUND",
    "extract_value",
    "format_value",
    "ActionDef",
    "ApiDef",
    "ColorDef",
    "ColumnDef",
    "ConfirmDef",
    "ResourceDef",
    "SubResourceDef",
]
