"""
cli/ui/handlers.py - 키 입력 → 탐색 동작 매핑

모드별 핸들러 테이블로 키 이름(cli/ui/keys.py)을 Navigator 호출로 변환합니다.
handle()이 True를 반환하면 종료 요청입니다.

Normal 모드 요약:
    j/k, ↓/↑       이동            gg/G, Home/End   처음/끝
    Enter, d       상세             Backspace        뒤로
    r              새로고침          /                필터 입력
    :              명령             ?                도움말
    0-5            존 전환          q, Ctrl+C        종료
    그 외 문자      하위 리소스 단축키 → 액션 단축키 순으로 조회
"""

import logging
import time
from typing import Callable, Dict, Optional

from core.config import DOUBLE_PRESS_SECONDS, ZONE_HOTKEYS
from core.exceptions import TgcpError
from core.navigation import Mode, Navigator

logger = logging.getLogger(__name__)

QUIT = True
CONTINUE = False

# Describe 모드 G 키 기본 표시 줄 수 (루프가 화면 높이로 갱신)
DEFAULT_DESCRIBE_ROWS = 30
DEFAULT_PAGE_SIZE = 10


def is_printable(key: str) -> bool:
    """단일 인쇄 가능 문자인지 확인"""
    return len(key) == 1 and key.isprintable()


class KeyHandler:
    """모드별 키 디스패처

    Args:
        nav: 조작할 Navigator
        clock: gg 더블 입력 판정용 시계
    """

    def __init__(self, nav: Navigator, clock: Callable[[], float] = time.monotonic):
        self.nav = nav
        self._clock = clock
        self._last_g: Optional[float] = None
        self.page_size = DEFAULT_PAGE_SIZE
        self.describe_rows = DEFAULT_DESCRIBE_ROWS
        self._handlers: Dict[Mode, Callable[[str], bool]] = {
            Mode.NORMAL: self._handle_normal,
            Mode.COMMAND: self._handle_command,
            Mode.HELP: self._handle_help,
            Mode.CONFIRM: self._handle_confirm,
            Mode.WARNING: self._handle_warning,
            Mode.PROJECTS: self._handle_projects,
            Mode.ZONES: self._handle_zones,
            Mode.DESCRIBE: self._handle_describe,
        }

    def handle(self, key: str) -> bool:
        """키 하나 처리

        Returns:
            True면 종료 요청
        """
        if key == "ctrl+c":
            return QUIT
        logger.debug("Key %r in %s mode", key, self.nav.mode.value)
        return self._handlers[self.nav.mode](key)

    # =========================================================================
    # Normal
    # =========================================================================

    def _is_double_g(self) -> bool:
        now = self._clock()
        if self._last_g is not None and now - self._last_g <= DOUBLE_PRESS_SECONDS:
            self._last_g = None
            return True
        self._last_g = now
        return False

    def _handle_filter_input(self, key: str) -> bool:
        """필터 입력 중 처리 (처리했으면 True)"""
        nav = self.nav
        if key == "esc":
            nav.clear_filter()
        elif key == "enter":
            nav.finish_filter()
        elif key == "backspace":
            nav.backspace_filter()
        elif is_printable(key):
            nav.type_filter_char(key)
        else:
            return False
        return True

    def _handle_normal(self, key: str) -> bool:
        nav = self.nav

        if nav.filter_active and self._handle_filter_input(key):
            return CONTINUE

        if key != "g":
            self._last_g = None

        if key == "q":
            return QUIT
        if key in ("j", "down"):
            nav.next()
        elif key in ("k", "up"):
            nav.previous()
        elif key == "g":
            if self._is_double_g():
                nav.go_to_top()
        elif key in ("G", "end"):
            nav.go_to_bottom()
        elif key == "home":
            nav.go_to_top()
        elif key == "pagedown":
            nav.page_down(self.page_size)
        elif key == "pageup":
            nav.page_up(self.page_size)
        elif key == "r":
            nav.refresh()
        elif key in ("enter", "d"):
            nav.enter_describe_mode()
        elif key == "?":
            nav.enter_help_mode()
        elif key == ":":
            nav.enter_command_mode()
        elif key == "/":
            nav.start_filter()
        elif key in ZONE_HOTKEYS:
            nav.switch_zone(ZONE_HOTKEYS[key])
            nav.refresh()
        elif key == "backspace":
            nav.navigate_back()
        elif key == "esc":
            if nav.filter_active or nav.filter_text:
                nav.clear_filter()
        else:
            self._handle_shortcut(key)
        return CONTINUE

    def _handle_shortcut(self, key: str) -> None:
        """하위 리소스 단축키 우선, 그다음 액션 단축키"""
        nav = self.nav

        sub_resource = nav.find_sub_resource_by_shortcut(key)
        if sub_resource is not None:
            try:
                nav.navigate_to_sub_resource(sub_resource)
            except TgcpError as e:
                nav.show_error(str(e))
            return

        action_index = nav.find_action_by_shortcut(key)
        if action_index is None:
            return
        nav.trigger_action(action_index)
        # 확인이 필요 없는 액션은 바로 실행
        if nav.mode is not Mode.CONFIRM:
            nav.execute_pending_action()

    # =========================================================================
    # Command
    # =========================================================================

    def _handle_command(self, key: str) -> bool:
        nav = self.nav
        command = nav.command
        if key == "esc":
            nav.exit_mode()
        elif key == "enter":
            return nav.execute_command()
        elif key == "backspace":
            command.backspace()
        elif key in ("tab", "right"):
            command.accept_suggestion()
        elif key == "down":
            command.next_suggestion()
        elif key == "up":
            command.prev_suggestion()
        elif is_printable(key):
            command.type_char(key)
        return CONTINUE

    # =========================================================================
    # 대화상자
    # =========================================================================

    def _handle_help(self, key: str) -> bool:
        if key in ("esc", "?", "q"):
            self.nav.exit_mode()
        return CONTINUE

    def _handle_confirm(self, key: str) -> bool:
        nav = self.nav
        if key in ("esc", "n", "N"):
            nav.exit_mode()
        elif key == "enter":
            nav.execute_pending_action()
        elif key in ("y", "Y"):
            nav.set_pending_choice(True)
            nav.execute_pending_action()
        elif key in ("left", "h"):
            nav.set_pending_choice(False)
        elif key in ("right", "l"):
            nav.set_pending_choice(True)
        elif key == "tab":
            nav.toggle_pending_choice()
        return CONTINUE

    def _handle_warning(self, key: str) -> bool:
        if key in ("esc", "enter"):
            self.nav.exit_mode()
        return CONTINUE

    # =========================================================================
    # 선택 목록
    # =========================================================================

    def _move_picker(self, key: str) -> bool:
        nav = self.nav
        if key in ("j", "down"):
            nav.next()
        elif key in ("k", "up"):
            nav.previous()
        elif key in ("g", "home"):
            nav.go_to_top()
        elif key in ("G", "end"):
            nav.go_to_bottom()
        else:
            return False
        return True

    def _handle_projects(self, key: str) -> bool:
        nav = self.nav
        if key == "esc":
            # 프로젝트가 없으면 선택 화면을 벗어날 수 없음
            if nav.has_project():
                nav.exit_mode()
        elif key == "enter":
            nav.select_project()
        else:
            self._move_picker(key)
        return CONTINUE

    def _handle_zones(self, key: str) -> bool:
        nav = self.nav
        if key == "esc":
            nav.exit_mode()
        elif key == "enter":
            nav.select_zone()
        else:
            self._move_picker(key)
        return CONTINUE

    # =========================================================================
    # Describe
    # =========================================================================

    def _handle_describe(self, key: str) -> bool:
        nav = self.nav
        if key in ("esc", "q", "d"):
            nav.exit_mode()
        elif key in ("j", "down"):
            nav.scroll_describe(1)
        elif key in ("k", "up"):
            nav.scroll_describe(-1)
        elif key == "pagedown":
            nav.scroll_describe(self.describe_rows)
        elif key == "pageup":
            nav.scroll_describe(-self.describe_rows)
        elif key in ("g", "home"):
            nav.describe_scroll_to_top()
        elif key in ("G", "end"):
            nav.describe_scroll_to_bottom(self.describe_rows)
        return CONTINUE
