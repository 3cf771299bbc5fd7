"""
core/navigation/navigator.py - 탐색 상태 머신

현재 리소스, 항목 목록, 선택, 부모 컨텍스트 스택, 모드 전이를 소유하고
새로고침을 구동합니다. 단일 작성자(single-writer)이며 재진입하지 않습니다:
외부 루프가 한 번에 하나의 동작을 네트워크 왕복까지 끝낸 뒤 다음 입력을 처리합니다.

관찰 지점 (렌더러가 읽는 값):
    mode, items, filtered_items, selected, breadcrumb(), pending_action,
    warning_message, error, loading, command(suggestions/preview)

Usage:
    from core.navigation import Navigator

    nav = Navigator(catalog, client, config=UserConfig.load())
    nav.refresh()
    nav.next()
    nav.navigate_to_sub_resource("node-pools")
"""

import json
import logging
import time
from typing import Any, Callable, List, Optional, Tuple

from cli.i18n import t
from core.catalog.extract import NOT_FOUND, extract_value
from core.catalog.loader import Catalog
from core.catalog.types import ResourceDef
from core.config import AVAILABLE_ZONES, DEFAULT_RESOURCE, REFRESH_INTERVAL_SECONDS, UserConfig
from core.exceptions import (
    ConfigError,
    NoItemSelectedError,
    NoResourceSelectedError,
    NotASubResourceError,
    TgcpError,
    UnknownResourceError,
)
from core.gcp.client import GcpClient
from core.gcp.dispatch import execute_action, list_resources

from .commands import CommandLine
from .filtering import clamp_selection, filter_items
from .state import DescribeState, Mode, ParentContext, PendingAction, Picker

logger = logging.getLogger(__name__)


class Navigator:
    """리소스 탐색 상태 머신

    Args:
        catalog: 불변 리소스 카탈로그
        client: GCP 클라이언트 (project/zone/region 컨텍스트 포함)
        config: 사용자 설정 (None이면 영속화하지 않음)
        readonly: 읽기 전용 모드 (모든 액션 차단)
        resource_key: 시작 리소스
        zones: 존 선택 화면 목록
        clock: 단조 시계 (테스트에서 교체)
    """

    def __init__(
        self,
        catalog: Catalog,
        client: GcpClient,
        config: Optional[UserConfig] = None,
        readonly: bool = False,
        resource_key: str = DEFAULT_RESOURCE,
        zones: Optional[List[str]] = None,
        clock: Callable[[], float] = time.monotonic,
        refresh_interval: float = REFRESH_INTERVAL_SECONDS,
    ):
        self.catalog = catalog
        self.client = client
        self.config = config
        self.readonly = readonly
        self._clock = clock
        self.refresh_interval = refresh_interval

        self.resource_key = resource_key
        self.items: List[Any] = []
        self.filtered_items: List[Any] = []
        self.selected = 0

        self.filter_text = ""
        self.filter_active = False

        self.parent_context: Optional[ParentContext] = None
        self.navigation_stack: List[ParentContext] = []

        self.mode = Mode.NORMAL if client.project else Mode.PROJECTS
        self.command = CommandLine(catalog)
        self.pending_action: Optional[PendingAction] = None
        self.describe: Optional[DescribeState] = None
        self.projects = Picker([client.project] if client.project else [])
        self.zones = Picker(list(zones if zones is not None else AVAILABLE_ZONES))

        self.loading = False
        self.error: Optional[str] = None
        self.warning_message: Optional[str] = None
        self.last_refresh = clock()

    # =========================================================================
    # 기본 조회
    # =========================================================================

    @property
    def project(self) -> str:
        return self.client.project

    @property
    def zone(self) -> str:
        return self.client.zone

    def has_project(self) -> bool:
        return bool(self.client.project)

    def current_resource(self) -> Optional[ResourceDef]:
        return self.catalog.get(self.resource_key)

    def selected_item(self) -> Optional[Any]:
        if 0 <= self.selected < len(self.filtered_items):
            return self.filtered_items[self.selected]
        return None

    def load_projects(self) -> None:
        """접근 가능한 프로젝트 목록 로드 (실패 시 현재 프로젝트만)"""
        try:
            projects = self.client.list_projects()
        except TgcpError as e:
            logger.warning("Failed to list projects: %s", e)
            projects = []
        if not projects and self.client.project:
            projects = [self.client.project]
        self.projects = Picker(projects)
        self.projects.select_value(self.client.project)

    # =========================================================================
    # 새로고침
    # =========================================================================

    def needs_refresh(self) -> bool:
        """자동 새로고침 필요 여부 (Normal 모드 + 로딩/오류 없음 + 프로젝트 선택 + 주기 경과)"""
        if self.mode is not Mode.NORMAL:
            return False
        if self.loading or self.error is not None:
            return False
        if not self.has_project():
            return False
        return self._clock() - self.last_refresh >= self.refresh_interval

    def mark_refreshed(self) -> None:
        self.last_refresh = self._clock()

    def refresh(self) -> None:
        """현재 리소스 목록을 다시 조회

        실패하면 오류 대화상자를 띄우고 두 목록을 모두 비웁니다.
        """
        self.loading = True
        self.error = None
        try:
            resource = self.current_resource()
            if resource is None:
                # 전이에서 이미 검증되므로 정상 경로에서는 발생하지 않음
                logger.error("Refresh of unknown resource %s", self.resource_key)
                self._fail_refresh(t("nav.resource_not_found", resource=self.resource_key))
                return

            parent_item = self.parent_context.item if self.parent_context else None
            try:
                items = list_resources(self.client, resource, parent_item)
            except TgcpError as e:
                logger.warning("Refresh of %s failed: %s", self.resource_key, e)
                self._fail_refresh(str(e))
                return

            previous = self.selected
            self.items = items
            self.apply_filter()
            self.selected = previous if previous < len(self.filtered_items) else 0
        finally:
            self.loading = False
            self.mark_refreshed()

    def _fail_refresh(self, message: str) -> None:
        self.show_error(message)
        self.items = []
        self.filtered_items = []
        self.selected = 0

    # =========================================================================
    # 필터
    # =========================================================================

    def apply_filter(self) -> None:
        self.filtered_items = filter_items(self.items, self.filter_text, self.current_resource())
        self.selected = clamp_selection(self.selected, len(self.filtered_items))

    def start_filter(self) -> None:
        self.filter_active = True
        self.filter_text = ""
        self.apply_filter()

    def type_filter_char(self, char: str) -> None:
        self.filter_text += char
        self.apply_filter()

    def backspace_filter(self) -> None:
        self.filter_text = self.filter_text[:-1]
        self.apply_filter()

    def finish_filter(self) -> None:
        """입력 모드만 끝내고 필터는 유지"""
        self.filter_active = False

    def clear_filter(self) -> None:
        self.filter_text = ""
        self.filter_active = False
        self.apply_filter()

    # =========================================================================
    # 커서 이동 (모드에 따라 프로젝트/존/항목 목록)
    # =========================================================================

    def _cursor(self) -> Tuple[int, int]:
        if self.mode is Mode.PROJECTS:
            return self.projects.selected, len(self.projects.options)
        if self.mode is Mode.ZONES:
            return self.zones.selected, len(self.zones.options)
        return self.selected, len(self.filtered_items)

    def _move_to(self, index: int) -> None:
        _, length = self._cursor()
        index = clamp_selection(index, length)
        if self.mode is Mode.PROJECTS:
            self.projects.selected = index
        elif self.mode is Mode.ZONES:
            self.zones.selected = index
        else:
            self.selected = index

    def next(self) -> None:
        self.page_down(1)

    def previous(self) -> None:
        self.page_up(1)

    def go_to_top(self) -> None:
        self._move_to(0)

    def go_to_bottom(self) -> None:
        _, length = self._cursor()
        if length:
            self._move_to(length - 1)

    def page_down(self, page_size: int) -> None:
        current, length = self._cursor()
        if length:
            self._move_to(current + page_size)

    def page_up(self, page_size: int) -> None:
        current, _ = self._cursor()
        self._move_to(current - page_size)

    # =========================================================================
    # 모드 전이
    # =========================================================================

    def enter_command_mode(self) -> None:
        self.mode = Mode.COMMAND
        self.command.open()

    def enter_help_mode(self) -> None:
        self.mode = Mode.HELP

    def enter_describe_mode(self) -> None:
        item = self.selected_item()
        if item is None:
            return
        self.describe = DescribeState(item=item)
        self.mode = Mode.DESCRIBE

    def show_warning(self, message: str) -> None:
        self.warning_message = message
        self.error = None
        self.mode = Mode.WARNING

    def show_error(self, message: str) -> None:
        self.error = message
        self.warning_message = None
        self.mode = Mode.WARNING

    def exit_mode(self) -> None:
        """Normal 모드로 복귀하며 대화상자 데이터를 모두 버림"""
        self.mode = Mode.NORMAL
        self.pending_action = None
        self.describe = None
        self.warning_message = None
        self.error = None

    # =========================================================================
    # Describe
    # =========================================================================

    def describe_text(self) -> str:
        """Describe 화면에 표시할 JSON (스냅샷 우선, 없으면 선택 항목)"""
        item = self.describe.item if self.describe else self.selected_item()
        if item is None:
            return ""
        return json.dumps(item, indent=2, ensure_ascii=False)

    def describe_line_count(self) -> int:
        text = self.describe_text()
        return len(text.splitlines()) if text else 0

    def scroll_describe(self, delta: int) -> None:
        if self.describe is not None:
            last_line = max(0, self.describe_line_count() - 1)
            self.describe.scroll = min(max(0, self.describe.scroll + delta), last_line)

    def describe_scroll_to_top(self) -> None:
        if self.describe is not None:
            self.describe.scroll = 0

    def describe_scroll_to_bottom(self, visible_lines: int) -> None:
        if self.describe is not None:
            self.describe.scroll = max(0, self.describe_line_count() - visible_lines)

    # =========================================================================
    # 프로젝트/존
    # =========================================================================

    def enter_projects_mode(self) -> None:
        self.projects.select_value(self.client.project)
        self.mode = Mode.PROJECTS

    def enter_zones_mode(self) -> None:
        self.zones.select_value(self.client.zone)
        self.mode = Mode.ZONES

    def switch_zone(self, zone: str) -> None:
        self.client.set_zone(zone)
        self._save("zone", zone)

    def switch_project(self, project: str) -> None:
        self.client.set_project(project)
        self._save("project", project)

    def select_project(self) -> None:
        project = self.projects.current()
        self.exit_mode()
        if project is not None:
            self.switch_project(project)
            self.refresh()

    def select_zone(self) -> None:
        zone = self.zones.current()
        self.exit_mode()
        if zone is not None:
            self.switch_zone(zone)
            self.refresh()

    def _save(self, field_name: str, value: str) -> None:
        """설정 저장 (실패해도 탐색은 계속)"""
        if self.config is None:
            return
        setter = {
            "zone": self.config.set_zone,
            "project": self.config.set_project,
            "last_resource": self.config.set_last_resource,
        }[field_name]
        try:
            setter(value)
        except ConfigError as e:
            logger.warning("Failed to save %s to config: %s", field_name, e)

    # =========================================================================
    # 리소스 탐색
    # =========================================================================

    def _reset_view(self) -> None:
        self.selected = 0
        self.filter_text = ""
        self.filter_active = False

    def navigate_to_resource(self, resource_key: str) -> None:
        """최상위 리소스로 이동 (부모 컨텍스트와 스택 전체 초기화)

        Raises:
            UnknownResourceError: 카탈로그에 없는 키
        """
        if resource_key not in self.catalog:
            raise UnknownResourceError(resource_key)

        self.parent_context = None
        self.navigation_stack.clear()
        self.resource_key = resource_key
        self._reset_view()
        self.mode = Mode.NORMAL
        self._save("last_resource", resource_key)

        self.refresh()

    def navigate_to_sub_resource(self, resource_key: str) -> None:
        """선택 항목을 부모로 하위 리소스로 드릴다운

        Raises:
            NoItemSelectedError: 선택 항목 없음
            NoResourceSelectedError: 현재 리소스 정의 없음
            NotASubResourceError: 현재 리소스에 선언되지 않은 하위 리소스
        """
        item = self.selected_item()
        if item is None:
            raise NoItemSelectedError()
        resource = self.current_resource()
        if resource is None:
            raise NoResourceSelectedError()
        if not resource.has_sub_resource(resource_key):
            raise NotASubResourceError(resource_key, self.resource_key)

        display_name = extract_value(item, resource.name_field)
        if display_name == NOT_FOUND:
            display_name = extract_value(item, resource.id_field)

        if self.parent_context is not None:
            self.navigation_stack.append(self.parent_context)
        self.parent_context = ParentContext(
            resource_key=self.resource_key,
            item=item,
            display_name=display_name,
        )

        self.resource_key = resource_key
        self._reset_view()
        self.refresh()

    def navigate_back(self) -> None:
        """부모 리소스로 복귀 (부모 컨텍스트가 없으면 아무것도 안 함)"""
        if self.parent_context is None:
            return

        origin = self.parent_context
        self.parent_context = self.navigation_stack.pop() if self.navigation_stack else None
        self.resource_key = origin.resource_key
        self._reset_view()
        self.refresh()

    def breadcrumb(self) -> List[str]:
        path = [ctx.label for ctx in self.navigation_stack]
        if self.parent_context is not None:
            path.append(self.parent_context.label)
        path.append(self.resource_key)
        return path

    # =========================================================================
    # 명령
    # =========================================================================

    def execute_command(self) -> bool:
        """명령줄 실행 (True면 종료 요청)"""
        return self.command.execute(self)

    # =========================================================================
    # 액션
    # =========================================================================

    def find_action_by_shortcut(self, shortcut: str) -> Optional[int]:
        resource = self.current_resource()
        return resource.find_action_by_shortcut(shortcut) if resource else None

    def find_sub_resource_by_shortcut(self, shortcut: str) -> Optional[str]:
        """단축키에 해당하는 하위 리소스 키 (선택 항목이 있어야 함)"""
        if self.selected_item() is None:
            return None
        resource = self.current_resource()
        if resource is None:
            return None
        sub = resource.find_sub_resource_by_shortcut(shortcut)
        return sub.resource_key if sub else None

    def action_hints(self) -> List[Tuple[str, str]]:
        resource = self.current_resource()
        return resource.action_hints() if resource else []

    def trigger_action(self, action_index: int) -> None:
        """액션 트리거

        확인이 필요한 액션은 Confirm 모드로 전환하고(기본 선택 No),
        아니면 선택 Yes인 PendingAction만 만들고 모드는 그대로 둡니다.
        호출자는 모드가 Confirm이 아니면 즉시 execute_pending_action()을 호출합니다.
        """
        if self.readonly:
            self.show_warning(t("nav.readonly_blocked"))
            return

        resource = self.current_resource()
        if resource is None or not 0 <= action_index < len(resource.actions):
            return
        action = resource.actions[action_index]

        item = self.selected_item()
        if item is None:
            self.show_warning(t("nav.no_item_selected"))
            return

        item_name = extract_value(item, resource.name_field)
        item_id = extract_value(item, resource.id_field)

        if action.confirm is not None:
            message = action.confirm.message.replace("{name}", item_name).replace("{id}", item_id)
            self.pending_action = PendingAction(
                message=message,
                destructive=action.confirm.destructive,
                selected_yes=False,
                action_index=action_index,
                resource_id=item_id,
            )
            self.mode = Mode.CONFIRM
        else:
            self.pending_action = PendingAction(
                message="",
                destructive=False,
                selected_yes=True,
                action_index=action_index,
                resource_id=item_id,
            )

    def set_pending_choice(self, yes: bool) -> None:
        if self.pending_action is not None:
            self.pending_action.selected_yes = yes

    def toggle_pending_choice(self) -> None:
        if self.pending_action is not None:
            self.pending_action.toggle()

    def execute_pending_action(self) -> None:
        """대기 중인 액션을 한 번만 소비하여 실행

        모드는 네트워크 호출 전에 Normal로 돌아갑니다.
        성공하면 전체 새로고침, 실패하면 항목 목록은 건드리지 않고 오류만 표시합니다.
        """
        pending, self.pending_action = self.pending_action, None
        if pending is None:
            return

        if not pending.selected_yes:
            self.exit_mode()
            return

        resource = self.current_resource()
        if resource is None:
            self.show_warning(t("nav.no_resource_selected"))
            return
        item = self.selected_item()
        if item is None:
            self.show_warning(t("nav.no_item_selected"))
            return

        if 0 <= pending.action_index < len(resource.actions):
            action_name = resource.actions[pending.action_index].display_name
        else:
            action_name = "Unknown"

        self.loading = True
        self.mode = Mode.NORMAL
        try:
            execute_action(self.client, resource, pending.action_index, item)
        except TgcpError as e:
            logger.warning("Action '%s' failed: %s", action_name, e)
            self.show_error(t("nav.action_failed", name=action_name, error=e))
        else:
            logger.info("Action '%s' succeeded", action_name)
            self.refresh()
        finally:
            self.loading = False
