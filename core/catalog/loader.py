"""
core/catalog/loader.py - 리소스 카탈로그 로더

여러 선언형 JSON 문서를 리소스 키 기준으로 병합해
불변 Catalog 값을 만듭니다. 시작 시 한 번 만들어 모든 소비자에게 전달합니다.

문서 형식:
    {
        "color_maps": {"status": [{"value": "RUNNING", "color": [0, 255, 0]}]},
        "resources": {"vm-instances": {...}}
    }

키 충돌 시 나중 문서가 이깁니다(last-wins). 기본은 경고 로그만 남기고,
strict=True 이면 DuplicateResourceError를 던집니다.

Usage:
    from core.catalog import Catalog

    catalog = Catalog.load_builtin()
    resource = catalog.get("vm-instances")
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from core.exceptions import CatalogError, DuplicateResourceError

from .types import ColorDef, ResourceDef

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).parent / "resources"

# 병합 순서 (나중 문서가 우선)
BUILTIN_DOCUMENTS: Tuple[str, ...] = (
    "common.json",
    "compute.json",
    "storage.json",
    "vpc.json",
    "iam.json",
    "gke.json",
    "cloudsql.json",
    "cloudrun.json",
    "functions.json",
    "pubsub.json",
    "secretmanager.json",
    "logging.json",
    "bigquery.json",
    "spanner.json",
    "dns.json",
    "loadbalancing.json",
    "scheduler.json",
    "tasks.json",
    "artifactregistry.json",
    "cloudbuild.json",
    "dataproc.json",
    "kms.json",
    "memorystore.json",
    "filestore.json",
    "composer.json",
    "dataflow.json",
    "appengine.json",
    "monitoring.json",
    "endpoints.json",
    "apigateway.json",
    "servicedirectory.json",
    "workflows.json",
)

# 리소스 키와 함께 명령어 자동완성에 노출되는 메타 명령
META_COMMANDS: Tuple[str, ...] = ("projects", "zones")


class Catalog:
    """불변 리소스 카탈로그

    Attributes:
        resources: 리소스 키 → ResourceDef (읽기 전용 매핑)
        color_maps: 컬러맵 이름 → ColorDef 튜플 (읽기 전용 매핑)
    """

    def __init__(
        self,
        resources: Mapping[str, ResourceDef],
        color_maps: Optional[Mapping[str, Tuple[ColorDef, ...]]] = None,
    ):
        self._resources = MappingProxyType(dict(resources))
        self._color_maps = MappingProxyType(dict(color_maps or {}))

    # -------------------------------------------------------------------------
    # 생성
    # -------------------------------------------------------------------------

    @classmethod
    def from_documents(
        cls,
        documents: Iterable[Tuple[str, Dict[str, Any]]],
        strict: bool = False,
    ) -> "Catalog":
        """(문서 이름, 파싱된 딕셔너리) 목록을 순서대로 병합

        Args:
            documents: 병합할 문서들
            strict: True면 리소스 키 중복 시 예외

        Raises:
            CatalogError: 문서 형식 오류
            DuplicateResourceError: strict 모드에서 키 중복
        """
        resources: Dict[str, ResourceDef] = {}
        origins: Dict[str, str] = {}
        color_maps: Dict[str, Tuple[ColorDef, ...]] = {}

        for name, doc in documents:
            if not isinstance(doc, dict):
                raise CatalogError("Document root must be an object", document=name)

            for map_name, entries in (doc.get("color_maps") or {}).items():
                color_maps[map_name] = tuple(
                    ColorDef.from_dict(e, f"{name}:color_maps.{map_name}") for e in entries
                )

            for key, data in (doc.get("resources") or {}).items():
                if key in resources:
                    if strict:
                        raise DuplicateResourceError(key, document=name)
                    logger.warning("Resource '%s' from %s overrides definition from %s", key, name, origins[key])
                try:
                    resources[key] = ResourceDef.from_dict(key, data)
                except CatalogError as e:
                    raise CatalogError(e.message, document=name) from e
                origins[key] = name

        logger.debug("Catalog loaded: %d resources, %d color maps", len(resources), len(color_maps))
        return cls(resources, color_maps)

    @classmethod
    def load_files(cls, paths: Iterable[Path], strict: bool = False) -> "Catalog":
        """JSON 파일 목록에서 로드"""

        def _read() -> Iterable[Tuple[str, Dict[str, Any]]]:
            for path in paths:
                try:
                    with path.open(encoding="utf-8") as f:
                        yield path.name, json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    raise CatalogError("Failed to read catalog document", document=path.name, cause=e) from e

        return cls.from_documents(_read(), strict=strict)

    @classmethod
    def load_builtin(cls, strict: bool = False) -> "Catalog":
        """패키지에 포함된 기본 문서들로 카탈로그 생성"""
        return cls.load_files((RESOURCES_DIR / name for name in BUILTIN_DOCUMENTS), strict=strict)

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    @property
    def resources(self) -> Mapping[str, ResourceDef]:
        return self._resources

    @property
    def color_maps(self) -> Mapping[str, Tuple[ColorDef, ...]]:
        return self._color_maps

    def get(self, key: Optional[str]) -> Optional[ResourceDef]:
        if key is None:
            return None
        return self._resources.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def keys(self) -> List[str]:
        """정렬된 리소스 키 목록"""
        return sorted(self._resources)

    def all_commands(self) -> List[str]:
        """명령어 자동완성 후보 (리소스 키 + 메타 명령, 정렬)"""
        return sorted(set(self._resources) | set(META_COMMANDS))

    def color_for(self, map_name: Optional[str], value: str) -> Optional[Tuple[int, int, int]]:
        """컬러맵에서 값의 RGB 색상 조회 (없으면 None)"""
        if not map_name:
            return None
        for entry in self._color_maps.get(map_name, ()):
            if entry.value == value:
                return entry.color
        return None
