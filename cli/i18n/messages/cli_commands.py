"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for command-line options and start-up output.
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # Options
    # =========================================================================
    "help": {
        "ko": "GCP 리소스를 위한 터미널 대시보드",
        "en": "Terminal dashboard for Google Cloud resources",
    },
    "opt_project": {
        "ko": "사용할 GCP 프로젝트 ID",
        "en": "GCP project ID to use",
    },
    "opt_zone": {
        "ko": "사용할 Compute 존",
        "en": "Compute zone to use",
    },
    "opt_resource": {
        "ko": "시작 리소스 (예: vm-instances)",
        "en": "Resource to open first (e.g. vm-instances)",
    },
    "opt_readonly": {
        "ko": "읽기 전용 모드 (모든 액션 비활성화)",
        "en": "Read-only mode (all actions disabled)",
    },
    "opt_log_level": {
        "ko": "로그 레벨 (로그 파일에 기록)",
        "en": "Log level (written to the log file)",
    },
    "opt_lang": {
        "ko": "표시 언어",
        "en": "Display language",
    },
    "opt_once": {
        "ko": "대시보드 없이 한 번만 조회하고 테이블 출력",
        "en": "List once and print a table instead of the dashboard",
    },
    "opt_json": {
        "ko": "--once와 함께 JSON으로 출력",
        "en": "With --once, print raw JSON",
    },
    "opt_list_resources": {
        "ko": "사용 가능한 리소스 목록 출력",
        "en": "Print the available resources",
    },
    # =========================================================================
    # Output
    # =========================================================================
    "unknown_resource": {
        "ko": "알 수 없는 리소스: {resource}",
        "en": "Unknown resource: {resource}",
    },
    "project_required": {
        "ko": "--once에는 프로젝트가 필요합니다 (--project 또는 GCP_PROJECT)",
        "en": "--once needs a project (--project or GCP_PROJECT)",
    },
    "catalog_failed": {
        "ko": "리소스 카탈로그 로드 실패: {error}",
        "en": "Failed to load resource catalog: {error}",
    },
    "not_a_terminal": {
        "ko": "대화형 터미널이 필요합니다. --once를 사용하세요.",
        "en": "An interactive terminal is required. Use --once instead.",
    },
    "resources_header": {
        "ko": "리소스",
        "en": "Resource",
    },
    "service_header": {
        "ko": "서비스",
        "en": "Service",
    },
    "name_header": {
        "ko": "이름",
        "en": "Name",
    },
}
