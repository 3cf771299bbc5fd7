"""
core/navigation/commands.py - 명령어 해석기

`:` 명령줄의 입력 버퍼, 자동완성 후보, 미리보기를 관리하고
입력된 명령을 탐색 동작으로 변환합니다.

인식하는 명령:
    q, quit          종료 신호
    back             뒤로 이동
    projects, zones  선택 화면 진입 (모드를 Normal로 되돌리지 않음)
    zone <name>      존 전환 후 새로고침
    project <id>     프로젝트 전환 후 새로고침
    <resource-key>   하위 리소스면 드릴다운, 아니면 최상위 이동
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from core.catalog.loader import Catalog
from core.exceptions import TgcpError, UnknownCommandError

from .state import Mode

if TYPE_CHECKING:
    from .navigator import Navigator

logger = logging.getLogger(__name__)

QUIT_COMMANDS = ("q", "quit")


class CommandLine:
    """명령줄 상태

    Attributes:
        text: 입력 버퍼
        suggestions: 현재 입력에 맞는 후보 (정렬됨)
        selected: 선택된 후보 인덱스
        preview: 선택된 후보 텍스트 (후보가 없으면 None)
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.text = ""
        self.suggestions: List[str] = []
        self.selected = 0
        self.preview: Optional[str] = None

    # -------------------------------------------------------------------------
    # 입력/자동완성
    # -------------------------------------------------------------------------

    def open(self) -> None:
        """명령 모드 진입 시 초기화: 전체 후보, 첫 번째 선택, 미리보기 없음"""
        self.text = ""
        self.suggestions = self.catalog.all_commands()
        self.selected = 0
        self.preview = None

    def update_suggestions(self) -> None:
        needle = self.text.lower()
        commands = self.catalog.all_commands()
        self.suggestions = [c for c in commands if needle in c] if needle else commands
        if self.selected >= len(self.suggestions):
            self.selected = 0
        self._update_preview()

    def _update_preview(self) -> None:
        self.preview = self.suggestions[self.selected] if self.suggestions else None

    def type_char(self, char: str) -> None:
        self.text += char
        self.update_suggestions()

    def backspace(self) -> None:
        self.text = self.text[:-1]
        self.update_suggestions()

    def next_suggestion(self) -> None:
        if self.suggestions:
            self.selected = (self.selected + 1) % len(self.suggestions)
            self._update_preview()

    def prev_suggestion(self) -> None:
        if self.suggestions:
            self.selected = (self.selected - 1) % len(self.suggestions)
            self._update_preview()

    def accept_suggestion(self) -> None:
        """미리보기를 입력 버퍼로 복사 (Tab/Right)"""
        if self.preview is not None:
            self.text = self.preview
            self.update_suggestions()

    def resolve(self) -> str:
        """실행할 명령 문자열 결정

        - 입력이 비었으면 미리보기
        - 미리보기가 입력을 포함하면 미리보기
        - 그 외에는 입력 그대로
        """
        if not self.text:
            return self.preview or ""
        if self.preview is not None and self.text in self.preview:
            return self.preview
        return self.text

    # -------------------------------------------------------------------------
    # 실행
    # -------------------------------------------------------------------------

    def execute(self, nav: "Navigator") -> bool:
        """명령 실행

        Returns:
            True면 프로세스 종료 요청
        """
        parts = self.resolve().split()
        if not parts:
            return False

        verb, args = parts[0], parts[1:]
        logger.debug("Executing command: %s", " ".join(parts))

        if verb in QUIT_COMMANDS:
            return True

        if verb == "projects":
            nav.enter_projects_mode()
            return False
        if verb == "zones":
            nav.enter_zones_mode()
            return False

        try:
            self._dispatch(nav, verb, args)
        except TgcpError as e:
            nav.show_error(str(e))

        # 오류 대화상자가 떠 있으면 그대로 둔다
        if nav.mode is Mode.COMMAND:
            nav.mode = Mode.NORMAL
        return False

    def _dispatch(self, nav: "Navigator", verb: str, args: List[str]) -> None:
        if verb == "back":
            nav.navigate_back()
        elif verb == "zone" and args:
            nav.switch_zone(args[0])
            nav.refresh()
        elif verb == "project" and args:
            nav.switch_project(args[0])
            nav.refresh()
        elif verb in self.catalog:
            resource = nav.current_resource()
            if resource is not None and resource.has_sub_resource(verb) and nav.selected_item() is not None:
                nav.navigate_to_sub_resource(verb)
            else:
                nav.navigate_to_resource(verb)
        else:
            raise UnknownCommandError(verb)
