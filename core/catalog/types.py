"""
core/catalog/types.py - 리소스 카탈로그 타입 정의

선언형 JSON 문서에서 로드되는 불변 정의들입니다.
한 번 로드된 뒤에는 절대 수정되지 않으므로 frozen dataclass로 표현합니다.

- ApiDef: 목록 조회 API 템플릿 {base, path, method}
- ColumnDef: 테이블 컬럼 (header, json_path, width, color_map)
- ConfirmDef: 확인 대화상자 설정
- ActionDef: 항목 단위 액션
- SubResourceDef: 하위 리소스로의 드릴다운 경로
- ResourceDef: 리소스 타입 하나의 전체 정의
- ColorDef: 값 → RGB 색상 매핑
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from core.exceptions import CatalogError


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise CatalogError(f"Missing field '{key}' in {where}")
    return data[key]


@dataclass(frozen=True)
class ApiDef:
    """REST API 템플릿

    Attributes:
        base: 서비스 베이스 URL (예: https://compute.googleapis.com)
        path: 플레이스홀더를 포함한 경로 템플릿
        method: HTTP 메서드
    """

    base: str
    path: str
    method: str = "GET"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "api") -> "ApiDef":
        return cls(
            base=str(_require(data, "base", where)),
            path=str(_require(data, "path", where)),
            method=str(data.get("method", "GET")).upper(),
        )


@dataclass(frozen=True)
class ColumnDef:
    """테이블 컬럼 정의"""

    header: str
    json_path: str
    width: int
    color_map: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "column") -> "ColumnDef":
        return cls(
            header=str(_require(data, "header", where)),
            json_path=str(_require(data, "json_path", where)),
            width=int(_require(data, "width", where)),
            color_map=data.get("color_map"),
        )


@dataclass(frozen=True)
class ConfirmDef:
    """액션 확인 설정

    Attributes:
        message: 확인 메시지 템플릿 ({name}, {id} 치환)
        destructive: 파괴적 액션 여부 (삭제 등)
    """

    message: str
    destructive: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "confirm") -> "ConfirmDef":
        return cls(
            message=str(_require(data, "message", where)),
            destructive=bool(data.get("destructive", False)),
        )


@dataclass(frozen=True)
class ActionDef:
    """항목 단위 액션 정의

    액션의 API는 method와 path만 가지며, base는 소속 리소스의 것을 사용합니다.
    """

    display_name: str
    method: str
    path: str
    shortcut: Optional[str] = None
    confirm: Optional[ConfirmDef] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "action") -> "ActionDef":
        api = _require(data, "api", where)
        confirm = data.get("confirm")
        return cls(
            display_name=str(_require(data, "display_name", where)),
            method=str(_require(api, "method", f"{where}.api")).upper(),
            path=str(_require(api, "path", f"{where}.api")),
            shortcut=data.get("shortcut"),
            confirm=ConfirmDef.from_dict(confirm, f"{where}.confirm") if confirm else None,
        )

    @property
    def needs_confirm(self) -> bool:
        return self.confirm is not None


@dataclass(frozen=True)
class SubResourceDef:
    """하위 리소스 드릴다운 경로

    Attributes:
        resource_key: 대상 리소스 키
        display_name: 표시 이름
        shortcut: 단축키
        parent_id_field: 부모 항목에서 식별자를 가져올 필드
        filter_param: 하위 요청에 사용되는 파라미터 이름
    """

    resource_key: str
    display_name: str
    shortcut: str
    parent_id_field: str = "name"
    filter_param: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "sub_resource") -> "SubResourceDef":
        return cls(
            resource_key=str(_require(data, "resource_key", where)),
            display_name=str(_require(data, "display_name", where)),
            shortcut=str(_require(data, "shortcut", where)),
            parent_id_field=str(data.get("parent_id_field", "name")),
            filter_param=str(data.get("filter_param", "")),
        )


@dataclass(frozen=True)
class ResourceDef:
    """리소스 타입 정의 (전역 공유, 불변)"""

    key: str
    display_name: str
    service: str
    api: ApiDef
    response_path: str
    id_field: str
    name_field: str
    columns: Tuple[ColumnDef, ...]
    actions: Tuple[ActionDef, ...] = field(default_factory=tuple)
    sub_resources: Tuple[SubResourceDef, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, key: str, data: Dict[str, Any]) -> "ResourceDef":
        """JSON 문서의 리소스 항목에서 생성

        Args:
            key: 리소스 키 (예: "vm-instances")
            data: 리소스 정의 딕셔너리

        Raises:
            CatalogError: 필수 필드 누락
        """
        where = f"resource '{key}'"
        return cls(
            key=key,
            display_name=str(_require(data, "display_name", where)),
            service=str(data.get("service", "")),
            api=ApiDef.from_dict(_require(data, "api", where), f"{where}.api"),
            response_path=str(data.get("response_path", "")),
            id_field=str(data.get("id_field", "name")),
            name_field=str(data.get("name_field", "name")),
            columns=tuple(
                ColumnDef.from_dict(c, f"{where}.columns[{i}]")
                for i, c in enumerate(_require(data, "columns", where))
            ),
            actions=tuple(
                ActionDef.from_dict(a, f"{where}.actions[{i}]") for i, a in enumerate(data.get("actions", []))
            ),
            sub_resources=tuple(
                SubResourceDef.from_dict(s, f"{where}.sub_resources[{i}]")
                for i, s in enumerate(data.get("sub_resources", []))
            ),
        )

    def has_sub_resource(self, resource_key: str) -> bool:
        return any(s.resource_key == resource_key for s in self.sub_resources)

    def find_action_by_shortcut(self, key: str) -> Optional[int]:
        """단축키에 해당하는 액션 인덱스 반환 (없으면 None)"""
        for i, action in enumerate(self.actions):
            if action.shortcut == key:
                return i
        return None

    def find_sub_resource_by_shortcut(self, key: str) -> Optional[SubResourceDef]:
        for sub in self.sub_resources:
            if sub.shortcut == key:
                return sub
        return None

    def action_hints(self) -> list:
        """푸터 표시용 (단축키, 이름) 목록"""
        hints = [(s.shortcut, s.display_name) for s in self.sub_resources]
        hints.extend((a.shortcut, a.display_name) for a in self.actions if a.shortcut)
        return hints


@dataclass(frozen=True)
class ColorDef:
    """값 → RGB 색상"""

    value: str
    color: Tuple[int, int, int]

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "color") -> "ColorDef":
        rgb = _require(data, "color", where)
        if len(rgb) != 3:
            raise CatalogError(f"Color in {where} must have 3 components")
        return cls(value=str(_require(data, "value", where)), color=(int(rgb[0]), int(rgb[1]), int(rgb[2])))
