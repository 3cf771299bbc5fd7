# core/gcp/auth/cache.py
"""
GCP 액세스 토큰 캐시

- CacheEntry: 만료 시간을 가진 제네릭 캐시 항목
- TokenCache: 스레드 안전한 단일 토큰 캐시 (TokenProvider에 주입)

설계 원칙:
- 전역 상태 없이 명시적으로 소유되는 객체
- 새로고침과 읽기가 경합할 수 있으므로 RLock으로 보호
- 만료 60초 전부터 만료된 것으로 간주
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

# 토큰 만료 판단 시 적용하는 여유 시간 (초)
EXPIRY_SKEW_SECONDS = 60


@dataclass
class CacheEntry(Generic[T]):
    """캐시 항목

    Attributes:
        value: 캐시된 값
        created_at: 생성 시간 (UTC)
        expires_at: 만료 시간 (UTC, None이면 만료되지 않음)
    """

    value: T
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: Optional[datetime] = None

    def is_expired(self, buffer_seconds: int = 0) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= (self.expires_at - timedelta(seconds=buffer_seconds))

    def remaining_seconds(self) -> Optional[int]:
        """남은 시간(초), 만료되지 않는 항목은 None"""
        if self.expires_at is None:
            return None
        remaining = self.expires_at - datetime.now(timezone.utc)
        return max(0, int(remaining.total_seconds()))


class TokenCache:
    """스레드 안전한 액세스 토큰 캐시

    토큰 발급 응답의 expires_in에서 skew를 뺀 시점까지 유효합니다.

    Example:
        cache = TokenCache()
        cache.set("ya29...", expires_in=3600)
        token = cache.get()  # 약 59분 동안 "ya29..."
    """

    def __init__(self, skew_seconds: int = EXPIRY_SKEW_SECONDS):
        self._entry: Optional[CacheEntry[str]] = None
        self._skew = skew_seconds
        self._lock = threading.RLock()

    def get(self) -> Optional[str]:
        """유효한 토큰 반환 (없거나 만료되면 None)"""
        with self._lock:
            if self._entry is None:
                return None
            if self._entry.is_expired():
                self._entry = None
                return None
            return self._entry.value

    def set(self, token: str, expires_in: int = 3600) -> None:
        """토큰 저장

        Args:
            token: 액세스 토큰
            expires_in: 발급 응답의 유효 기간 (초)
        """
        lifetime = max(0, int(expires_in) - self._skew)
        with self._lock:
            self._entry = CacheEntry(
                value=token,
                expires_at=datetime.now(timezone.utc) + timedelta(seconds=lifetime),
            )

    def clear(self) -> None:
        with self._lock:
            self._entry = None

    def remaining_seconds(self) -> Optional[int]:
        with self._lock:
            return self._entry.remaining_seconds() if self._entry else None
