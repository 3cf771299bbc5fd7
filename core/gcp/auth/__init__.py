"""
core/gcp/auth - GCP 인증

Usage:
    from core.gcp.auth import TokenCache, TokenProvider

    provider = TokenProvider(cache=TokenCache())
    token = provider.get_token()
"""

from .cache import CacheEntry, TokenCache
from .provider import TokenProvider, get_adc_paths

__all__ = [
    "CacheEntry",
    "TokenCache",
    "TokenProvider",
    "get_adc_paths",
]
