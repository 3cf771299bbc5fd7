# tests/core/navigation/test_navigator.py
"""
core/navigation/navigator.py 테스트

새로고침, 리소스/하위 리소스 이동, 뒤로 가기, 브레드크럼,
커서 이동, 프로젝트/존 선택, Describe 모드를 검증합니다.
"""

import pytest

from core.config import AVAILABLE_ZONES, UserConfig
from core.exceptions import (
    NoItemSelectedError,
    NotASubResourceError,
    UnknownResourceError,
    UpstreamRequestError,
)
from core.navigation import Mode, Navigator

# =============================================================================
# 초기 상태
# =============================================================================


class TestInitialState:
    """생성 직후 상태 테스트"""

    def test_starts_in_normal_mode_with_project(self, make_nav):
        """프로젝트가 있으면 Normal 모드로 시작"""
        nav = make_nav(refresh=False)
        assert nav.mode is Mode.NORMAL
        assert nav.items == []
        assert nav.selected == 0

    def test_starts_in_projects_mode_without_project(self, make_nav, client_factory):
        """프로젝트가 없으면 Projects 모드로 시작"""
        nav = make_nav(client=client_factory(project=""), refresh=False)
        assert nav.mode is Mode.PROJECTS

    def test_breadcrumb_is_resource_key(self, make_nav):
        """부모가 없으면 브레드크럼은 리소스 키 하나"""
        nav = make_nav(refresh=False)
        assert nav.breadcrumb() == ["instances"]


# =============================================================================
# 새로고침
# =============================================================================


class TestRefresh:
    """refresh() 테스트"""

    def test_refresh_loads_items(self, make_nav, fake_client):
        """목록을 조회하고 필터 목록도 채움"""
        nav = make_nav()
        assert [i["name"] for i in nav.items] == ["web-1", "web-2", "db-1"]
        assert nav.filtered_items == nav.items
        assert nav.loading is False
        assert fake_client.calls_for("GET") == [
            "https://compute.example.com/projects/test-project/zones/us-central1-a/instances"
        ]

    def test_refresh_stamps_time(self, make_nav, clock):
        """성공/실패와 무관하게 새로고침 시각 기록"""
        nav = make_nav(refresh=False)
        clock.advance(42)
        nav.refresh()
        assert nav.last_refresh == clock.now

    def test_refresh_preserves_selection_in_range(self, make_nav):
        """이전 선택이 범위 안이면 유지"""
        nav = make_nav()
        nav.selected = 2
        nav.refresh()
        assert nav.selected == 2

    def test_refresh_resets_selection_out_of_range(self, make_nav, fake_client):
        """이전 선택이 범위를 벗어나면 0"""
        nav = make_nav()
        nav.selected = 2
        fake_client.route("/instances", {"items": [{"name": "only"}]})
        nav.refresh()
        assert nav.selected == 0

    def test_refresh_with_five_items_and_empty_filter(self, make_nav, fake_client):
        """빈 필터 + 5개 항목: 필터 목록 5개, 선택 유지 또는 0"""
        fake_client.route("/instances", {"items": [{"name": f"vm-{i}"} for i in range(5)]})
        nav = make_nav()
        assert len(nav.filtered_items) == 5

        nav.selected = 3
        nav.refresh()
        assert nav.selected == 3

        nav.selected = 7
        nav.refresh()
        assert nav.selected == 0

    def test_refresh_failure_clears_items(self, make_nav, fake_client):
        """실패 시 두 목록을 비우고 오류 대화상자 표시"""
        nav = make_nav()
        nav.selected = 1
        fake_client.route("/instances", UpstreamRequestError(403, "denied"))

        nav.refresh()

        assert nav.items == []
        assert nav.filtered_items == []
        assert nav.selected == 0
        assert nav.mode is Mode.WARNING
        assert nav.error == "GCP API Error 403: denied"
        assert nav.loading is False

    def test_refresh_unknown_resource_shows_error(self, make_nav, fake_client):
        """리소스 정의가 없으면 예외 없이 오류 대화상자, 목록 비움, 조회 없음"""
        nav = make_nav()
        calls_before = len(fake_client.calls_for("GET"))
        nav.resource_key = "no-such-resource"

        nav.refresh()

        assert nav.mode is Mode.WARNING
        assert nav.loading is False
        assert nav.error == "Resource no-such-resource not found"
        assert nav.items == []
        assert nav.filtered_items == []
        assert nav.selected == 0
        assert len(fake_client.calls_for("GET")) == calls_before

    def test_refresh_applies_active_filter(self, make_nav):
        """새로고침 후 필터 재적용"""
        nav = make_nav()
        nav.filter_text = "web"
        nav.refresh()
        assert [i["name"] for i in nav.filtered_items] == ["web-1", "web-2"]


class TestNeedsRefresh:
    """needs_refresh() 테스트"""

    def test_not_before_interval(self, make_nav, clock):
        nav = make_nav()
        clock.advance(4.9)
        assert nav.needs_refresh() is False

    def test_after_interval(self, make_nav, clock):
        nav = make_nav()
        clock.advance(5)
        assert nav.needs_refresh() is True

    def test_blocked_by_dialog(self, make_nav, clock):
        """Normal 이외 모드에서는 자동 새로고침 안 함"""
        nav = make_nav()
        clock.advance(10)
        nav.enter_help_mode()
        assert nav.needs_refresh() is False

    def test_blocked_by_error(self, make_nav, clock):
        """확인하지 않은 오류가 있으면 안 함"""
        nav = make_nav()
        clock.advance(10)
        nav.error = "boom"
        assert nav.needs_refresh() is False

    def test_blocked_while_loading(self, make_nav, clock):
        nav = make_nav()
        clock.advance(10)
        nav.loading = True
        assert nav.needs_refresh() is False

    def test_blocked_without_project(self, make_nav, client_factory, clock):
        nav = make_nav(client=client_factory(project=""), refresh=False)
        nav.mode = Mode.NORMAL
        clock.advance(10)
        assert nav.needs_refresh() is False

    def test_mark_refreshed_resets_timer(self, make_nav, clock):
        nav = make_nav()
        clock.advance(10)
        nav.mark_refreshed()
        assert nav.needs_refresh() is False


# =============================================================================
# 최상위 리소스 이동
# =============================================================================


class TestNavigateToResource:
    """navigate_to_resource() 테스트"""

    def test_unknown_resource_raises(self, make_nav):
        """카탈로그에 없는 키는 예외, 상태는 그대로"""
        nav = make_nav()
        with pytest.raises(UnknownResourceError) as exc_info:
            nav.navigate_to_resource("nope")
        assert exc_info.value.resource_key == "nope"
        assert nav.resource_key == "instances"
        assert len(nav.items) == 3

    def test_switches_and_refreshes(self, make_nav):
        nav = make_nav()
        nav.selected = 2
        nav.filter_text = "web"
        nav.navigate_to_resource("clusters")

        assert nav.resource_key == "clusters"
        assert nav.selected == 0
        assert nav.filter_text == ""
        assert nav.mode is Mode.NORMAL
        assert len(nav.items) == 2

    def test_clears_navigation_stack(self, make_nav):
        """최상위 이동은 부모 컨텍스트와 스택을 모두 비움"""
        nav = make_nav("clusters")
        nav.navigate_to_sub_resource("pools")
        nav.navigate_to_sub_resource("nodes")
        assert nav.navigation_stack

        nav.navigate_to_resource("instances")

        assert nav.parent_context is None
        assert nav.navigation_stack == []
        assert nav.breadcrumb() == ["instances"]

    def test_saves_last_resource(self, make_nav, user_config):
        """마지막 리소스를 설정 파일에 저장"""
        nav = make_nav(config=user_config)
        nav.navigate_to_resource("clusters")
        assert UserConfig.load(user_config.path).last_resource == "clusters"

    def test_config_save_failure_is_not_fatal(self, make_nav, tmp_path):
        """설정 저장 실패는 경고 로그만 남기고 이동은 계속"""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        nav = make_nav(config=UserConfig(path=blocker / "config.yaml"))

        nav.navigate_to_resource("clusters")

        assert nav.resource_key == "clusters"
        assert nav.mode is Mode.NORMAL


# =============================================================================
# 하위 리소스 / 뒤로 가기
# =============================================================================


class TestSubResourceNavigation:
    """navigate_to_sub_resource() / navigate_back() 테스트"""

    def test_drill_down_captures_parent(self, make_nav, fake_client):
        """출발 리소스 키와 선택 항목 스냅샷을 부모로 기록"""
        nav = make_nav("clusters")
        nav.navigate_to_sub_resource("pools")

        assert nav.resource_key == "pools"
        assert nav.parent_context.resource_key == "clusters"
        assert nav.parent_context.item["selfLink"] == "alpha-link"
        assert nav.parent_context.display_name == "alpha"
        assert fake_client.calls[-1] == (
            "GET",
            "https://compute.example.com/projects/p/locations/us-central1/clusters/alpha/nodePools",
        )

    def test_drill_down_uses_selected_item(self, make_nav, fake_client):
        nav = make_nav("clusters")
        nav.next()
        nav.navigate_to_sub_resource("pools")
        assert nav.parent_context.display_name == "beta"
        assert fake_client.calls[-1][1].endswith("/clusters/beta/nodePools")

    def test_breadcrumb_after_drill_down(self, make_nav):
        nav = make_nav("clusters")
        nav.navigate_to_sub_resource("pools")
        assert nav.breadcrumb() == ["clusters:alpha", "pools"]

    def test_nested_drill_down_pushes_stack(self, make_nav, fake_client):
        """두 단계 드릴다운 시 이전 부모는 스택으로"""
        nav = make_nav("clusters")
        nav.navigate_to_sub_resource("pools")
        nav.navigate_to_sub_resource("nodes")

        assert len(nav.navigation_stack) == 1
        assert nav.navigation_stack[0].resource_key == "clusters"
        assert nav.parent_context.resource_key == "pools"
        assert nav.breadcrumb() == ["clusters:alpha", "pools:default", "nodes"]
        assert fake_client.calls[-1][1].endswith("/clusters/alpha/nodePools/default/nodes")

    def test_back_restores_previous_level(self, make_nav):
        nav = make_nav("clusters")
        nav.navigate_to_sub_resource("pools")
        nav.navigate_to_sub_resource("nodes")

        nav.navigate_back()
        assert nav.resource_key == "pools"
        assert nav.parent_context.resource_key == "clusters"
        assert nav.navigation_stack == []

        nav.navigate_back()
        assert nav.resource_key == "clusters"
        assert nav.parent_context is None

    def test_drill_then_back_is_identity_on_key_and_stack(self, make_nav):
        """드릴다운 후 뒤로 가면 리소스 키와 스택 길이가 복원됨"""
        nav = make_nav("clusters")
        nav.navigate_to_sub_resource("pools")
        key_before, depth_before = nav.resource_key, len(nav.navigation_stack)

        nav.navigate_to_sub_resource("nodes")
        nav.navigate_back()

        assert nav.resource_key == key_before
        assert len(nav.navigation_stack) == depth_before

    def test_back_resets_selection_and_filter(self, make_nav):
        nav = make_nav("clusters")
        nav.navigate_to_sub_resource("pools")
        nav.filter_text = "x"
        nav.navigate_back()
        assert nav.filter_text == ""
        assert nav.selected == 0

    def test_back_without_parent_is_noop(self, make_nav, fake_client):
        """부모가 없으면 아무 요청도 하지 않음"""
        nav = make_nav()
        calls = len(fake_client.calls)
        nav.navigate_back()
        assert nav.resource_key == "instances"
        assert len(fake_client.calls) == calls

    def test_no_selection_raises(self, make_nav, fake_client):
        fake_client.route("/clusters", {"clusters": []})
        nav = make_nav("clusters")
        with pytest.raises(NoItemSelectedError):
            nav.navigate_to_sub_resource("pools")

    def test_undeclared_sub_resource_raises(self, make_nav):
        nav = make_nav()
        with pytest.raises(NotASubResourceError) as exc_info:
            nav.navigate_to_sub_resource("pools")
        assert exc_info.value.parent_key == "instances"
        assert nav.resource_key == "instances"

    def test_label_falls_back_to_id_field(self, make_nav, fake_client):
        """이름 필드가 없으면 id 필드로 라벨 생성"""
        fake_client.route("/clusters", {"clusters": [{"selfLink": "gamma-link"}]})
        nav = make_nav("clusters")
        nav.navigate_to_sub_resource("pools")
        assert nav.parent_context.label == "clusters:gamma-link"


# =============================================================================
# 커서 이동
# =============================================================================


class TestCursor:
    """커서 이동 테스트"""

    def test_next_and_previous_saturate(self, make_nav):
        nav = make_nav()
        nav.previous()
        assert nav.selected == 0
        for _ in range(5):
            nav.next()
        assert nav.selected == 2

    def test_top_and_bottom(self, make_nav):
        nav = make_nav()
        nav.go_to_bottom()
        assert nav.selected == 2
        nav.go_to_top()
        assert nav.selected == 0

    def test_page_moves_clamp(self, make_nav):
        nav = make_nav()
        nav.page_down(10)
        assert nav.selected == 2
        nav.page_up(10)
        assert nav.selected == 0

    def test_empty_list_keeps_zero(self, make_nav, fake_client):
        fake_client.route("/instances", {"items": []})
        nav = make_nav()
        nav.next()
        nav.go_to_bottom()
        assert nav.selected == 0

    def test_projects_mode_moves_picker(self, make_nav):
        """Projects 모드에서는 프로젝트 목록 커서를 이동"""
        nav = make_nav()
        nav.load_projects()
        nav.enter_projects_mode()
        nav.next()
        assert nav.projects.selected == 1
        assert nav.selected == 0


# =============================================================================
# 프로젝트 / 존
# =============================================================================


class TestProjectsAndZones:
    """프로젝트/존 선택 테스트"""

    def test_load_projects(self, make_nav):
        nav = make_nav(refresh=False)
        nav.load_projects()
        assert nav.projects.options == ["test-project", "other-project"]
        assert nav.projects.current() == "test-project"

    def test_load_projects_falls_back_on_error(self, make_nav, fake_client):
        """목록 조회 실패 시 현재 프로젝트만"""
        fake_client.projects = UpstreamRequestError(403, "denied")
        nav = make_nav(refresh=False)
        nav.load_projects()
        assert nav.projects.options == ["test-project"]

    def test_load_projects_falls_back_on_empty(self, make_nav, fake_client):
        fake_client.projects = []
        nav = make_nav(refresh=False)
        nav.load_projects()
        assert nav.projects.options == ["test-project"]

    def test_enter_projects_mode_preselects_current(self, make_nav, fake_client):
        fake_client.project = "other-project"
        nav = make_nav(refresh=False)
        nav.load_projects()
        nav.enter_projects_mode()
        assert nav.mode is Mode.PROJECTS
        assert nav.projects.selected == 1

    def test_select_project(self, make_nav, fake_client, user_config):
        """프로젝트 선택: 클라이언트 전환, 설정 저장, 새로고침"""
        nav = make_nav(config=user_config)
        nav.load_projects()
        nav.enter_projects_mode()
        nav.next()
        nav.select_project()

        assert nav.mode is Mode.NORMAL
        assert fake_client.project == "other-project"
        assert UserConfig.load(user_config.path).project == "other-project"
        assert "/projects/other-project/" in fake_client.calls[-1][1]

    def test_select_project_keeps_refresh_error_visible(self, make_nav, fake_client):
        """선택 후 새로고침 실패 시 오류 대화상자 유지"""
        nav = make_nav()
        nav.load_projects()
        nav.enter_projects_mode()
        fake_client.route("/instances", UpstreamRequestError(403, "denied"))
        nav.select_project()
        assert nav.mode is Mode.WARNING

    def test_enter_zones_mode_preselects_current(self, make_nav, fake_client):
        fake_client.set_zone(AVAILABLE_ZONES[3])
        nav = make_nav(refresh=False)
        nav.enter_zones_mode()
        assert nav.mode is Mode.ZONES
        assert nav.zones.selected == 3

    def test_select_zone(self, make_nav, fake_client, user_config):
        nav = make_nav(config=user_config)
        nav.enter_zones_mode()
        nav.go_to_bottom()
        nav.select_zone()

        assert fake_client.zone == AVAILABLE_ZONES[-1]
        assert fake_client.region == AVAILABLE_ZONES[-1].rsplit("-", 1)[0]
        assert UserConfig.load(user_config.path).zone == AVAILABLE_ZONES[-1]
        assert nav.mode is Mode.NORMAL

    def test_switch_zone_does_not_refresh(self, make_nav, fake_client):
        """switch_zone은 새로고침하지 않음 (호출자가 결정)"""
        nav = make_nav()
        calls = len(fake_client.calls)
        nav.switch_zone("europe-west1-b")
        assert len(fake_client.calls) == calls
        assert nav.zone == "europe-west1-b"


# =============================================================================
# 대화상자 / Describe
# =============================================================================


class TestDialogs:
    """경고/오류/모드 종료 테스트"""

    def test_warning_and_error_are_exclusive(self, make_nav):
        nav = make_nav()
        nav.show_error("bad")
        nav.show_warning("careful")
        assert nav.warning_message == "careful"
        assert nav.error is None
        assert nav.mode is Mode.WARNING

        nav.show_error("bad")
        assert nav.warning_message is None

    def test_exit_mode_clears_dialog_data(self, make_nav):
        nav = make_nav()
        nav.trigger_action(1)
        nav.show_error("bad")
        nav.exit_mode()
        assert nav.mode is Mode.NORMAL
        assert nav.pending_action is None
        assert nav.error is None
        assert nav.warning_message is None


class TestDescribe:
    """Describe 모드 테스트"""

    def test_enter_describe_snapshots_item(self, make_nav):
        nav = make_nav()
        nav.next()
        nav.enter_describe_mode()
        assert nav.mode is Mode.DESCRIBE
        assert nav.describe.item["name"] == "web-2"
        assert nav.describe.scroll == 0
        assert '"name": "web-2"' in nav.describe_text()

    def test_enter_describe_without_items_is_noop(self, make_nav, fake_client):
        fake_client.route("/instances", {"items": []})
        nav = make_nav()
        nav.enter_describe_mode()
        assert nav.mode is Mode.NORMAL
        assert nav.describe is None

    def test_scroll_bounds(self, make_nav):
        nav = make_nav()
        nav.enter_describe_mode()
        lines = nav.describe_line_count()
        assert lines == 6

        nav.scroll_describe(-3)
        assert nav.describe.scroll == 0
        nav.scroll_describe(100)
        assert nav.describe.scroll == lines - 1

        nav.describe_scroll_to_bottom(4)
        assert nav.describe.scroll == lines - 4
        nav.describe_scroll_to_bottom(30)
        assert nav.describe.scroll == 0

    def test_exit_describe_drops_snapshot(self, make_nav):
        nav = make_nav()
        nav.enter_describe_mode()
        nav.exit_mode()
        assert nav.describe is None


def test_navigator_defaults(catalog, fake_client):
    """기본 생성자 인자: vm-instances 리소스, 전체 존 목록"""
    nav = Navigator(catalog, fake_client)
    assert nav.resource_key == "vm-instances"
    assert nav.zones.options == AVAILABLE_ZONES
    assert nav.current_resource() is None
