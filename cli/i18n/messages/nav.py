"""
cli/i18n/messages/nav.py - Navigation Messages

Contains translations for warnings and errors raised by the navigator.
"""

from __future__ import annotations

NAV_MESSAGES = {
    # =========================================================================
    # Action Guards
    # =========================================================================
    "readonly_blocked": {
        "ko": "읽기 전용 모드입니다. 액션이 비활성화되어 있습니다.",
        "en": "Read-only mode: actions are disabled.",
    },
    "no_item_selected": {
        "ko": "선택된 항목이 없습니다",
        "en": "No item selected",
    },
    "no_resource_selected": {
        "ko": "선택된 리소스가 없습니다",
        "en": "No resource selected",
    },
    # =========================================================================
    # Errors
    # =========================================================================
    "resource_not_found": {
        "ko": "리소스 '{resource}'을(를) 찾을 수 없습니다",
        "en": "Resource {resource} not found",
    },
    "action_failed": {
        "ko": "액션 '{name}' 실패: {error}",
        "en": "Action '{name}' failed: {error}",
    },
}
