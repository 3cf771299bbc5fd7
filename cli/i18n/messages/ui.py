"""
cli/i18n/messages/ui.py - Dashboard UI Messages

Contains translations for the header, table, dialogs and key hints.
"""

from __future__ import annotations

UI_MESSAGES = {
    # =========================================================================
    # Header
    # =========================================================================
    "project": {
        "ko": "프로젝트",
        "en": "Project",
    },
    "zone": {
        "ko": "존",
        "en": "Zone",
    },
    "region": {
        "ko": "리전",
        "en": "Region",
    },
    "no_project": {
        "ko": "(선택 안 됨)",
        "en": "(none)",
    },
    "readonly_badge": {
        "ko": "읽기 전용",
        "en": "READ-ONLY",
    },
    "loading": {
        "ko": "불러오는 중...",
        "en": "Loading...",
    },
    "items_count": {
        "ko": "{count}개 항목",
        "en": "{count} items",
    },
    "filtered_count": {
        "ko": "{shown}/{total}개 항목",
        "en": "{shown}/{total} items",
    },
    # =========================================================================
    # Table
    # =========================================================================
    "empty": {
        "ko": "표시할 항목이 없습니다",
        "en": "No items",
    },
    "filter_prompt": {
        "ko": "필터",
        "en": "Filter",
    },
    "command_prompt": {
        "ko": "명령",
        "en": "Command",
    },
    # =========================================================================
    # Dialogs
    # =========================================================================
    "confirm_title": {
        "ko": "확인",
        "en": "Confirm",
    },
    "destructive_title": {
        "ko": "위험한 작업",
        "en": "Destructive Action",
    },
    "yes": {
        "ko": "예",
        "en": "Yes",
    },
    "no": {
        "ko": "아니오",
        "en": "No",
    },
    "warning_title": {
        "ko": "경고",
        "en": "Warning",
    },
    "error_title": {
        "ko": "오류",
        "en": "Error",
    },
    "dismiss_hint": {
        "ko": "Enter/Esc: 닫기",
        "en": "Enter/Esc: close",
    },
    "projects_title": {
        "ko": "프로젝트 선택",
        "en": "Select Project",
    },
    "zones_title": {
        "ko": "존 선택",
        "en": "Select Zone",
    },
    "picker_hint": {
        "ko": "j/k: 이동  Enter: 선택  Esc: 취소",
        "en": "j/k: move  Enter: select  Esc: cancel",
    },
    "describe_title": {
        "ko": "상세",
        "en": "Describe",
    },
    "describe_hint": {
        "ko": "j/k: 스크롤  g/G: 처음/끝  Esc: 닫기",
        "en": "j/k: scroll  g/G: top/bottom  Esc: close",
    },
    # =========================================================================
    # Help
    # =========================================================================
    "help_title": {
        "ko": "도움말",
        "en": "Help",
    },
    "help_navigation": {
        "ko": "탐색",
        "en": "Navigation",
    },
    "help_views": {
        "ko": "화면",
        "en": "Views",
    },
    "help_actions": {
        "ko": "현재 리소스 액션",
        "en": "Resource Actions",
    },
    "help_move": {
        "ko": "위/아래 이동",
        "en": "Move down/up",
    },
    "help_top_bottom": {
        "ko": "처음/끝으로 이동",
        "en": "Go to top/bottom",
    },
    "help_describe": {
        "ko": "상세 보기",
        "en": "Describe item",
    },
    "help_back": {
        "ko": "부모 리소스로 돌아가기",
        "en": "Back to parent resource",
    },
    "help_refresh": {
        "ko": "새로고침",
        "en": "Refresh",
    },
    "help_filter": {
        "ko": "필터",
        "en": "Filter",
    },
    "help_command": {
        "ko": "명령 (리소스 이름, projects, zones, zone <z>, project <p>, back, q)",
        "en": "Command (resource name, projects, zones, zone <z>, project <p>, back, q)",
    },
    "help_zones": {
        "ko": "존 단축키",
        "en": "Zone hotkeys",
    },
    "help_quit": {
        "ko": "종료",
        "en": "Quit",
    },
    "help_close": {
        "ko": "?/Esc: 닫기",
        "en": "?/Esc: close",
    },
    "hint_normal": {
        "ko": "?:도움말  ::명령  /:필터  d:상세  r:새로고침  q:종료",
        "en": "?:help  ::command  /:filter  d:describe  r:refresh  q:quit",
    },
}
