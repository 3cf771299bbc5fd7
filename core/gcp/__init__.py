"""
core/gcp - GCP REST 접근 계층

- auth: 토큰 캐시와 토큰 제공자
- client: Bearer 인증 HTTP 클라이언트
- dispatch: 리소스 정의 기반 목록 조회/액션 실행
"""

from .client import GcpClient, derive_region
from .dispatch import execute_action, interpolate_url, list_resources

__all__ = [
    "GcpClient",
    "derive_region",
    "execute_action",
    "interpolate_url",
    "list_resources",
]
