"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    TgcpError (베이스)
    ├── CatalogError (리소스 카탈로그)
    │   └── DuplicateResourceError
    ├── NavigationError (탐색/명령)
    │   ├── UnknownResourceError
    │   ├── NotASubResourceError
    │   ├── NoItemSelectedError
    │   ├── NoResourceSelectedError
    │   └── UnknownCommandError
    ├── DispatchError (REST 호출)
    │   ├── ActionIndexOutOfRangeError
    │   ├── UpstreamRequestError
    │   └── MalformedResponseError
    ├── AuthError (인증)
    │   ├── CredentialsNotFoundError
    │   └── TokenRequestError
    └── ConfigError (설정)

Usage:
    from core.exceptions import UpstreamRequestError

    try:
        items = list_resources(client, resource)
    except UpstreamRequestError as e:
        navigator.show_error(str(e))
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class TgcpError(Exception):
    """tgcp 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 카탈로그 관련 예외
# =============================================================================


class CatalogError(TgcpError):
    """리소스 카탈로그 로드 관련 예외"""

    def __init__(
        self,
        message: str,
        document: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.document = document
        if document:
            self.details["document"] = document


class DuplicateResourceError(CatalogError):
    """두 문서가 같은 리소스 키를 정의한 경우 (strict 로드 전용)"""

    def __init__(self, resource_key: str, document: Optional[str] = None):
        super().__init__(f"Duplicate resource key '{resource_key}'", document=document)
        self.resource_key = resource_key
        self.details["resource_key"] = resource_key


# =============================================================================
# 탐색 관련 예외
# =============================================================================


class NavigationError(TgcpError):
    """탐색 상태 머신 관련 예외"""

    pass


class UnknownResourceError(NavigationError):
    """카탈로그에 없는 리소스 키"""

    def __init__(self, resource_key: str):
        super().__init__(f"Unknown resource: {resource_key}")
        self.resource_key = resource_key
        self.details["resource_key"] = resource_key


class NotASubResourceError(NavigationError):
    """현재 리소스에 선언되지 않은 하위 리소스로의 이동"""

    def __init__(self, resource_key: str, parent_key: str):
        super().__init__(f"{resource_key} is not a sub-resource of {parent_key}")
        self.resource_key = resource_key
        self.parent_key = parent_key
        self.details.update({"resource_key": resource_key, "parent_key": parent_key})


class NoItemSelectedError(NavigationError):
    """선택된 항목이 없음"""

    def __init__(self):
        super().__init__("No item selected")


class NoResourceSelectedError(NavigationError):
    """현재 리소스 정의가 없음"""

    def __init__(self):
        super().__init__("No resource selected")


class UnknownCommandError(NavigationError):
    """인식할 수 없는 명령어"""

    def __init__(self, command: str):
        super().__init__(f"Unknown command: {command}")
        self.command = command
        self.details["command"] = command


# =============================================================================
# REST 호출 관련 예외
# =============================================================================


class DispatchError(TgcpError):
    """리소스 조회/액션 실행 관련 예외"""

    pass


class ActionIndexOutOfRangeError(DispatchError):
    """리소스에 존재하지 않는 액션 인덱스"""

    def __init__(self, action_index: int, resource_name: str = ""):
        super().__init__(f"Action index {action_index} out of bounds")
        self.action_index = action_index
        self.details.update({"action_index": action_index, "resource": resource_name})


class UpstreamRequestError(DispatchError):
    """GCP API가 2xx 이외의 상태 코드를 반환한 경우

    Attributes:
        status: HTTP 상태 코드
        body: 응답 본문 (원문 그대로)
    """

    def __init__(
        self,
        status: int,
        body: str,
        method: str = "",
        url: str = "",
    ):
        super().__init__(f"GCP API Error {status}: {body}")
        self.status = status
        self.body = body
        self.method = method
        self.url = url
        self.details.update({"status": status, "method": method, "url": url})


class MalformedResponseError(DispatchError):
    """응답 본문을 JSON으로 해석할 수 없는 경우"""

    def __init__(self, url: str, cause: Optional[Exception] = None):
        super().__init__(f"Malformed response from {url}", cause)
        self.url = url
        self.details["url"] = url


# =============================================================================
# 인증 관련 예외
# =============================================================================


class AuthError(TgcpError):
    """인증 관련 예외"""

    pass


class CredentialsNotFoundError(AuthError):
    """어떤 자격증명 소스에서도 토큰을 얻지 못한 경우"""

    def __init__(self):
        super().__init__(
            "No valid GCP credentials found. Please either:\n"
            " - Run 'gcloud auth application-default login'\n"
            " - Set GOOGLE_APPLICATION_CREDENTIALS to a service account JSON file\n"
            " - Set GCP_ACCESS_TOKEN environment variable"
        )


class TokenRequestError(AuthError):
    """토큰 교환 요청 실패"""

    def __init__(self, source: str, status: Optional[int] = None, body: str = ""):
        message = f"Token request failed [{source}]"
        if status is not None:
            message = f"{message} ({status})"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)
        self.source = source
        self.status = status
        self.details.update({"source": source, "status": status})


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(TgcpError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"Config error [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def is_permission_denied(error: Exception) -> bool:
    """권한 오류(401/403)인지 확인"""
    return isinstance(error, UpstreamRequestError) and error.status in (401, 403)


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, UpstreamRequestError):
        friendly_messages = {
            401: "Authentication failed. Re-run 'gcloud auth application-default login'.",
            403: "Permission denied. Check the IAM roles for this project.",
            429: "Too many requests. Try again shortly.",
        }
        hint = friendly_messages.get(error.status)
        if hint:
            return f"{error}\n\n{hint}"
        return str(error)

    if isinstance(error, TgcpError):
        return str(error)

    return str(error)
