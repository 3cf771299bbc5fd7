"""
core/navigation - 탐색 상태 머신, 필터 엔진, 명령어 해석기
"""

from .commands import CommandLine
from .filtering import clamp_selection, filter_items
from .navigator import Navigator
from .state import DescribeState, Mode, ParentContext, PendingAction, Picker

__all__ = [
    "CommandLine",
    "DescribeState",
    "Mode",
    "Navigator",
    "ParentContext",
    "PendingAction",
    "Picker",
    "clamp_selection",
    "filter_items",
]
