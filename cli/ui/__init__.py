# cli/ui - TUI 컴포넌트 (rich)
"""
TUI 컴포넌트 모듈

대시보드 렌더링, 키 입력, 모드별 키 처리, 이벤트 루프
"""

from .console import console, get_console, get_logger, print_error, setup_logging
from .handlers import KeyHandler
from .keys import KeyReader, decode_keys
from .loop import run_dashboard, start_navigator
from .render import build_items_table, render_dashboard, visible_window

__all__ = [
    "KeyHandler",
    "KeyReader",
    "build_items_table",
    "console",
    "decode_keys",
    "get_console",
    "get_logger",
    "print_error",
    "render_dashboard",
    "run_dashboard",
    "setup_logging",
    "start_navigator",
    "visible_window",
]
