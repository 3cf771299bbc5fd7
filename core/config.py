"""
core/config.py - 전역 상수와 사용자 설정

대시보드 기본값(존, 리소스, 새로고침 주기)과
YAML 사용자 설정 파일(~/.config/tgcp/config.yaml)을 관리합니다.

Usage:
    from core.config import UserConfig, effective_project

    config = UserConfig.load()
    project = effective_project(config)
    config.set_zone("us-east1-b")
"""

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml  # type: ignore[import-untyped]

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# =============================================================================
# 기본값
# =============================================================================

APP_NAME = "tgcp"
DEFAULT_ZONE = "us-central1-a"
DEFAULT_RESOURCE = "vm-instances"

# Normal 모드 자동 새로고침 간격 (초)
REFRESH_INTERVAL_SECONDS = 5.0

# HTTP 전송 계층 타임아웃 (초)
HTTP_TIMEOUT_SECONDS = 30

# gg 더블 입력 인식 간격 (초)
DOUBLE_PRESS_SECONDS = 0.5

AVAILABLE_ZONES: List[str] = [
    "us-central1-a",
    "us-central1-b",
    "us-central1-c",
    "us-east1-b",
    "us-east1-c",
    "us-west1-a",
    "us-west1-b",
    "europe-west1-b",
    "europe-west1-c",
    "asia-east1-a",
    "asia-east1-b",
    "asia-northeast1-a",
]

# 숫자 키 → 존 빠른 전환
ZONE_HOTKEYS: Dict[str, str] = {
    "0": "us-central1-a",
    "1": "us-east1-b",
    "2": "us-west1-a",
    "3": "europe-west1-b",
    "4": "asia-east1-a",
    "5": "asia-northeast1-a",
}

PROJECT_ENV_VARS = ("GCP_PROJECT", "GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT")
ZONE_ENV_VAR = "CLOUDSDK_COMPUTE_ZONE"


# =============================================================================
# 경로
# =============================================================================


def get_config_dir() -> Path:
    """설정 디렉토리 경로 ($XDG_CONFIG_HOME/tgcp 또는 ~/.config/tgcp)"""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_NAME


def get_config_path() -> Path:
    return get_config_dir() / "config.yaml"


def get_log_path() -> Path:
    """로그 파일 경로 (대시보드가 화면을 점유하므로 로그는 파일로 보냄)"""
    return get_config_dir() / f"{APP_NAME}.log"


def get_version() -> str:
    """설치된 패키지 버전 반환"""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version(APP_NAME)
    except PackageNotFoundError:
        return "0.1.0"


# =============================================================================
# 사용자 설정
# =============================================================================


@dataclass
class UserConfig:
    """사용자 설정 (YAML 영속화)

    Attributes:
        project: 마지막으로 선택한 프로젝트 ID
        zone: 마지막으로 선택한 존
        last_resource: 마지막으로 연 최상위 리소스 키
        path: 저장 경로 (None이면 기본 경로)
    """

    project: Optional[str] = None
    zone: Optional[str] = None
    last_resource: Optional[str] = None
    path: Optional[Path] = None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "UserConfig":
        """설정 파일 로드

        파일이 없거나 읽을 수 없으면 기본값을 반환합니다 (예외를 던지지 않음).
        """
        config_path = path or get_config_path()
        if not config_path.exists():
            return cls(path=config_path)

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to read config %s: %s", config_path, e)
            return cls(path=config_path)

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed config %s", config_path)
            return cls(path=config_path)

        return cls(
            project=_optional_str(data.get("project")),
            zone=_optional_str(data.get("zone")),
            last_resource=_optional_str(data.get("last_resource")),
            path=config_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("path")
        return {k: v for k, v in data.items() if v is not None}

    def save(self) -> None:
        """설정 파일 저장

        Raises:
            ConfigError: 디렉토리 생성 또는 쓰기 실패
        """
        config_path = self.path or get_config_path()
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with config_path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=True)
        except OSError as e:
            raise ConfigError(str(config_path), "failed to save", cause=e) from e

    def set_project(self, project: str) -> None:
        self.project = project
        self.save()

    def set_zone(self, zone: str) -> None:
        self.zone = zone
        self.save()

    def set_last_resource(self, resource_key: str) -> None:
        self.last_resource = resource_key
        self.save()


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def effective_project(config: Optional[UserConfig] = None) -> Optional[str]:
    """유효 프로젝트: 환경 변수 우선, 다음으로 설정 파일"""
    for var in PROJECT_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value
    return config.project if config else None


def effective_zone(config: Optional[UserConfig] = None) -> str:
    """유효 존: CLOUDSDK_COMPUTE_ZONE → 설정 파일 → 기본값"""
    value = os.environ.get(ZONE_ENV_VAR)
    if value:
        return value
    if config and config.zone:
        return config.zone
    return DEFAULT_ZONE
