"""
cli/ui/loop.py - 대시보드 이벤트 루프

렌더 → (필요 시) 자동 새로고침 → 키 폴링(100ms) → 모드별 처리 순으로
단일 스레드에서 반복합니다. 한 동작이 네트워크 왕복까지 끝나야 다음 키를 읽습니다.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.live import Live

from core.navigation import Navigator

from .console import get_console
from .handlers import KeyHandler
from .keys import KeyReader
from .render import body_rows, render_dashboard

logger = logging.getLogger(__name__)

POLL_TIMEOUT_SECONDS = 0.1


def start_navigator(nav: Navigator) -> None:
    """시작 시 프로젝트 목록을 읽고, 프로젝트가 있으면 첫 목록을 조회"""
    nav.load_projects()
    if nav.has_project():
        nav.refresh()


def run_dashboard(
    nav: Navigator,
    console: Optional[Console] = None,
    reader: Optional[KeyReader] = None,
) -> None:
    """종료 키(q, Ctrl+C, :quit)가 입력될 때까지 대시보드 실행"""
    console = console or get_console()
    reader = reader or KeyReader()
    handler = KeyHandler(nav)

    start_navigator(nav)

    try:
        with reader, Live(console=console, screen=True, auto_refresh=False) as live:
            while True:
                height = console.size.height
                handler.page_size = body_rows(height)
                handler.describe_rows = body_rows(height)
                live.update(render_dashboard(nav, height), refresh=True)

                if nav.needs_refresh():
                    nav.refresh()
                    continue

                key = reader.read_key(POLL_TIMEOUT_SECONDS)
                if key is None:
                    continue
                if handler.handle(key):
                    logger.info("Quit requested")
                    break
    except KeyboardInterrupt:
        logger.info("Interrupted")
