"""
tests/conftest.py - pytest 공통 픽스처

GCP API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(make_nav, fake_client):
        # fake_client: 응답을 미리 지정하는 가짜 GCP 클라이언트
        # make_nav: 테스트 카탈로그 기반 Navigator 팩토리
        pass
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cli.i18n import set_lang  # noqa: E402
from core.catalog import Catalog  # noqa: E402
from core.config import UserConfig  # noqa: E402
from core.gcp.client import derive_region  # noqa: E402
from core.navigation import Navigator  # noqa: E402

BASE = "https://compute.example.com"


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """테스트 환경 설정 (실제 자격증명/설정 파일을 읽지 않도록)"""
    for var in (
        "GCP_PROJECT",
        "GOOGLE_CLOUD_PROJECT",
        "GCLOUD_PROJECT",
        "CLOUDSDK_COMPUTE_ZONE",
        "GCP_ACCESS_TOKEN",
        "GOOGLE_CREDENTIALS",
        "GOOGLE_APPLICATION_CREDENTIALS",
        "CLOUDSDK_CONFIG",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    set_lang("en")

    yield

    set_lang("en")


# =============================================================================
# 가짜 GCP 클라이언트
# =============================================================================


class FakeClient:
    """응답을 스크립트로 지정하는 GCP 클라이언트

    route()로 (메서드, URL 조각) → 응답을 등록합니다.
    나중에 등록한 규칙이 우선하며, 응답이 예외면 raise 합니다.
    """

    def __init__(self, project: str = "test-project", zone: str = "us-central1-a"):
        self.project = project
        self.zone = zone
        self.region = derive_region(zone)
        self.routes: List[Tuple[str, str, Any]] = []
        self.calls: List[Tuple[str, str]] = []
        self.projects: Any = ["test-project", "other-project"]

    def route(self, fragment: str, response: Any, method: str = "GET") -> None:
        self.routes.append((method, fragment, response))

    def set_zone(self, zone: str) -> None:
        self.zone = zone
        self.region = derive_region(zone)

    def set_project(self, project: str) -> None:
        self.project = project

    @property
    def has_project(self) -> bool:
        return bool(self.project)

    def request(self, method: str, url: str) -> Any:
        self.calls.append((method, url))
        for route_method, fragment, response in reversed(self.routes):
            if route_method == method and fragment in url:
                if isinstance(response, Exception):
                    raise response
                return response
        return {}

    def list_projects(self) -> List[str]:
        if isinstance(self.projects, Exception):
            raise self.projects
        return list(self.projects)

    def calls_for(self, method: str) -> List[str]:
        return [url for m, url in self.calls if m == method]


class FakeClock:
    """수동으로 진행시키는 단조 시계"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# 테스트 카탈로그
# =============================================================================


TEST_DOCUMENT: Dict[str, Any] = {
    "color_maps": {
        "status": [
            {"value": "RUNNING", "color": [0, 255, 0]},
            {"value": "TERMINATED", "color": [255, 0, 0]},
        ]
    },
    "resources": {
        "instances": {
            "display_name": "VM Instances",
            "service": "compute",
            "api": {"base": BASE, "path": "projects/{project}/zones/{zone}/instances"},
            "response_path": "items",
            "id_field": "id",
            "name_field": "name",
            "columns": [
                {"header": "NAME", "json_path": "name", "width": 30},
                {"header": "STATUS", "json_path": "status", "width": 12, "color_map": "status"},
                {"header": "ZONE", "json_path": "zone", "width": 16},
            ],
            "actions": [
                {
                    "display_name": "Start",
                    "shortcut": "s",
                    "api": {"method": "POST", "path": "projects/{project}/zones/{zone}/instances/{name}/start"},
                },
                {
                    "display_name": "Stop",
                    "shortcut": "S",
                    "api": {"method": "POST", "path": "projects/{project}/zones/{zone}/instances/{name}/stop"},
                    "confirm": {"message": "Stop {name}?"},
                },
                {
                    "display_name": "Delete",
                    "shortcut": "ctrl+d",
                    "api": {"method": "DELETE", "path": "projects/{project}/zones/{zone}/instances/{name}"},
                    "confirm": {"message": "Delete {name} ({id})?", "destructive": True},
                },
            ],
        },
        "clusters": {
            "display_name": "Clusters",
            "service": "container",
            "api": {"base": BASE, "path": "projects/{project}/locations/-/clusters"},
            "response_path": "clusters",
            "id_field": "selfLink",
            "name_field": "name",
            "columns": [{"header": "NAME", "json_path": "name", "width": 30}],
            "sub_resources": [{"resource_key": "pools", "display_name": "Node Pools", "shortcut": "n"}],
        },
        "pools": {
            "display_name": "Node Pools",
            "service": "container",
            "api": {"base": BASE, "path": "{cluster}/nodePools"},
            "response_path": "nodePools",
            "id_field": "name",
            "name_field": "name",
            "columns": [{"header": "NAME", "json_path": "name", "width": 30}],
            "sub_resources": [{"resource_key": "nodes", "display_name": "Nodes", "shortcut": "o"}],
        },
        "nodes": {
            "display_name": "Nodes",
            "service": "container",
            "api": {"base": BASE, "path": "{parent}/nodes"},
            "response_path": "nodes",
            "id_field": "name",
            "name_field": "name",
            "columns": [{"header": "NAME", "json_path": "name", "width": 30}],
        },
    },
}

INSTANCES = [
    {"name": "web-1", "id": "101", "status": "RUNNING", "zone": "projects/p/zones/us-central1-a"},
    {"name": "web-2", "id": "102", "status": "TERMINATED", "zone": "projects/p/zones/us-central1-a"},
    {"name": "db-1", "id": "201", "status": "RUNNING", "zone": "projects/p/zones/us-central1-a"},
]

CLUSTERS = [
    {"name": "projects/p/locations/us-central1/clusters/alpha", "selfLink": "alpha-link", "location": "us-central1"},
    {"name": "projects/p/locations/us-central1/clusters/beta", "selfLink": "beta-link", "location": "us-central1"},
]

POOLS = [
    {"name": "projects/p/locations/us-central1/clusters/alpha/nodePools/default"},
]


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.from_documents([("test.json", TEST_DOCUMENT)])


@pytest.fixture
def fake_client() -> FakeClient:
    client = FakeClient()
    client.route("/instances", {"items": INSTANCES})
    client.route("/clusters", {"clusters": CLUSTERS})
    client.route("/nodePools", {"nodePools": POOLS})
    return client


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def user_config(tmp_path) -> UserConfig:
    return UserConfig(path=tmp_path / "tgcp" / "config.yaml")


@pytest.fixture
def make_nav(catalog, fake_client, clock):
    """Navigator 팩토리 (기본: instances 리소스, 새로고침 전 상태)"""

    def _make(
        resource_key: str = "instances",
        client: Optional[FakeClient] = None,
        config: Optional[UserConfig] = None,
        readonly: bool = False,
        refresh: bool = True,
    ) -> Navigator:
        nav = Navigator(
            catalog,
            client or fake_client,
            config=config,
            readonly=readonly,
            resource_key=resource_key,
            clock=clock,
        )
        if refresh:
            nav.refresh()
        return nav

    return _make


@pytest.fixture
def client_factory():
    """빈 FakeClient 생성기"""
    return FakeClient
