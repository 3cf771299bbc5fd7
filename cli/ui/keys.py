"""
cli/ui/keys.py - 터미널 키 입력

termios 비정규 모드(ICANON/ECHO off, VMIN=0/VTIME=0)로 전환한 뒤
select로 타임아웃 폴링합니다. tty.setraw()를 쓰지 않으므로 Rich Live의
대체 화면 렌더링과 Ctrl+C(SIGINT)가 그대로 동작합니다.

키 이름:
    인쇄 가능 문자      그대로 ("j", "G", "/", "한")
    특수 키            "enter", "esc", "tab", "backspace", "delete",
                      "up", "down", "left", "right", "home", "end",
                      "pageup", "pagedown", "backtab"
    제어 문자          "ctrl+c", "ctrl+d", ... ("ctrl+<letter>")
    인식 못한 시퀀스    "unknown"
"""

import codecs
import os
import select
import sys
from collections import deque
from typing import Deque, List, Optional, Tuple

ESC = "\x1b"

CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
}

ESCAPE_SEQUENCES = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "[H": "home",
    "[F": "end",
    "[Z": "backtab",
    "[1~": "home",
    "[3~": "delete",
    "[4~": "end",
    "[5~": "pageup",
    "[6~": "pagedown",
    "[7~": "home",
    "[8~": "end",
    "OA": "up",
    "OB": "down",
    "OC": "right",
    "OD": "left",
    "OH": "home",
    "OF": "end",
}

# 분할 도착한 이스케이프 시퀀스의 나머지를 기다리는 시간 (초)
ESCAPE_WAIT_SECONDS = 0.02


def _match_escape(text: str, start: int) -> Tuple[str, int]:
    """ESC 다음 위치(start)부터 시퀀스를 해석

    Returns:
        (키 이름, ESC 뒤로 소비한 문자 수)
    """
    if start >= len(text):
        return "esc", 0

    lead = text[start]
    if lead == "[":
        end = start + 1
        while end < len(text) and text[end] in "0123456789;":
            end += 1
        if end >= len(text):
            return "esc", 0
        return ESCAPE_SEQUENCES.get(text[start : end + 1], "unknown"), end + 1 - start
    if lead == "O" and start + 1 < len(text):
        return ESCAPE_SEQUENCES.get(text[start : start + 2], "unknown"), 2

    # Alt+<key> 등은 ESC 단독으로 보고 다음 문자는 따로 처리
    return "esc", 0


def decode_keys(text: str) -> List[str]:
    """터미널 입력 문자열을 키 이름 목록으로 변환

    Examples:
        >>> decode_keys("jj\\x1b[A\\r")
        ['j', 'j', 'up', 'enter']
    """
    keys: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == ESC:
            name, consumed = _match_escape(text, i + 1)
            keys.append(name)
            i += 1 + consumed
            continue

        if ch in CONTROL_KEYS:
            keys.append(CONTROL_KEYS[ch])
        elif ord(ch) < 0x20:
            keys.append(f"ctrl+{chr(ord(ch) + 0x60)}")
        else:
            keys.append(ch)
        i += 1
    return keys


class KeyReader:
    """비정규 모드 키 리더 (컨텍스트 매니저)

    Usage:
        with KeyReader() as reader:
            key = reader.read_key(timeout=0.1)  # None이면 타임아웃
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._fd: Optional[int] = None
        self._old_settings = None
        self._pending: Deque[str] = deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")

    def __enter__(self) -> "KeyReader":
        import termios

        self._fd = self.stream.fileno()
        self._old_settings = termios.tcgetattr(self._fd)
        new = termios.tcgetattr(self._fd)
        new[3] &= ~(termios.ICANON | termios.ECHO)
        new[6][termios.VMIN] = 0
        new[6][termios.VTIME] = 0
        termios.tcsetattr(self._fd, termios.TCSADRAIN, new)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._old_settings is not None and self._fd is not None:
            import termios

            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
            self._old_settings = None

    def _read_available(self, timeout: float) -> str:
        if self._fd is None:
            raise RuntimeError("KeyReader is not active")
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return ""
        return self._decoder.decode(os.read(self._fd, 64))

    def read_key(self, timeout: float = 0.1) -> Optional[str]:
        """키 하나를 읽음 (timeout 동안 입력이 없으면 None)"""
        if self._pending:
            return self._pending.popleft()

        text = self._read_available(timeout)
        if not text:
            return None

        # 시퀀스가 ESC 또는 ESC[ 에서 잘렸으면 나머지를 잠깐 기다림
        while text.endswith(ESC) or text.endswith(ESC + "[") or text.endswith(ESC + "O"):
            more = self._read_available(ESCAPE_WAIT_SECONDS)
            if not more:
                break
            text += more

        self._pending.extend(decode_keys(text))
        return self._pending.popleft() if self._pending else None
