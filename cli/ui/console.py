"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력과 로깅 설정을 위한 함수들.
대시보드가 화면 전체를 점유하므로 로그는 파일로 보냅니다.
"""

import logging
import platform
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from core.config import get_log_path

# requests/urllib3 노이즈 로그 제한
logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)


def get_console(file=None) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        file=file,
        color_system="auto",
        highlight=False,
        soft_wrap=False,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


def get_logger(name: str = "tgcp") -> logging.Logger:
    """Rich 핸들러가 설정된 logger를 반환합니다.

    대시보드 밖(--once, 시작 오류)에서 사용자에게 보이는 로그용입니다.

    Args:
        name: logger 이름 (기본값: "tgcp")

    Returns:
        logging.Logger: 설정된 logger 인스턴스
    """
    logger = logging.getLogger(name)

    # 이미 핸들러가 설정되어 있으면 반환
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger


def setup_logging(level: str = "INFO", log_path: Optional[Path] = None) -> Path:
    """루트 logger를 로그 파일로 설정

    Args:
        level: 로그 레벨 이름 (DEBUG/INFO/WARNING/ERROR)
        log_path: 로그 파일 경로 (기본값: 설정 디렉토리의 tgcp.log)

    Returns:
        실제 로그 파일 경로
    """
    path = log_path or get_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return path


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

SYMBOL_ERROR = "✗"


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")
