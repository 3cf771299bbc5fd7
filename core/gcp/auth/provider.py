"""
core/gcp/auth/provider.py - GCP 액세스 토큰 제공자

자격증명 소스를 순서대로 확인하여 Bearer 토큰을 얻습니다.

토큰 해석 순서:
    0. TokenCache (유효한 토큰이 있으면 즉시 반환)
    1. GCP_ACCESS_TOKEN 환경 변수 (캐시하지 않음)
    2. GOOGLE_CREDENTIALS 환경 변수 (인라인 JSON)
    3. GOOGLE_APPLICATION_CREDENTIALS 환경 변수 (JSON 파일 경로)
    4. Application Default Credentials 파일 위치들
    5. GCE 메타데이터 서버

자격증명 문서 타입:
    - service_account: RS256 JWT를 서명해 jwt-bearer 그랜트로 교환
    - authorized_user: refresh_token 그랜트로 교환

Usage:
    from core.gcp.auth import TokenProvider

    provider = TokenProvider()
    token = provider.get_token()
"""

import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import jwt
import requests

from core.config import HTTP_TIMEOUT_SECONDS, PROJECT_ENV_VARS
from core.exceptions import AuthError, CredentialsNotFoundError, TokenRequestError

from .cache import TokenCache

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"
METADATA_TOKEN_URL = "http://metadata.google.internal/computeMetadata/v1/instance/service-accounts/default/token"
METADATA_PROJECT_URL = "http://metadata.google.internal/computeMetadata/v1/project/project-id"
METADATA_HEADERS = {"Metadata-Flavor": "Google"}
METADATA_TIMEOUT_SECONDS = 2

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ADC_FILENAME = "application_default_credentials.json"
DEFAULT_EXPIRES_IN = 3600


def get_adc_paths(env: Optional[Mapping[str, str]] = None) -> List[Path]:
    """Application Default Credentials 후보 경로 (우선순위 순)"""
    env = os.environ if env is None else env
    paths: List[Path] = []

    if env.get("CLOUDSDK_CONFIG"):
        paths.append(Path(env["CLOUDSDK_CONFIG"]) / ADC_FILENAME)

    home = Path.home()
    paths.append(home / ".config" / "gcloud" / ADC_FILENAME)

    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        paths.append(Path(xdg) / "gcloud" / ADC_FILENAME)

    if sys.platform == "win32" and env.get("APPDATA"):
        paths.append(Path(env["APPDATA"]) / "gcloud" / ADC_FILENAME)

    # 순서를 유지하면서 중복 제거
    unique: List[Path] = []
    for path in paths:
        if path not in unique:
            unique.append(path)
    return unique


class TokenProvider:
    """GCP 액세스 토큰 제공자

    Args:
        cache: 주입할 토큰 캐시 (None이면 새로 생성)
        session: HTTP 세션 (테스트에서 교체 가능)
        env: 환경 변수 매핑 (기본: os.environ)
    """

    def __init__(
        self,
        cache: Optional[TokenCache] = None,
        session: Optional[requests.Session] = None,
        env: Optional[Mapping[str, str]] = None,
    ):
        self.cache = cache or TokenCache()
        self.session = session or requests.Session()
        self._env = env

    @property
    def env(self) -> Mapping[str, str]:
        return os.environ if self._env is None else self._env

    # =========================================================================
    # 토큰
    # =========================================================================

    def get_token(self) -> str:
        """Bearer 토큰 반환

        Raises:
            CredentialsNotFoundError: 어떤 소스에서도 자격증명을 찾지 못함
            TokenRequestError: 토큰 교환 실패
            AuthError: 자격증명 문서 형식 오류
        """
        cached = self.cache.get()
        if cached:
            return cached

        env = self.env

        token = env.get("GCP_ACCESS_TOKEN")
        if token:
            logger.info("Using token from GCP_ACCESS_TOKEN env var")
            return token

        inline = env.get("GOOGLE_CREDENTIALS")
        if inline:
            logger.info("Using credentials from GOOGLE_CREDENTIALS env var")
            return self._token_from_document(inline, "GOOGLE_CREDENTIALS")

        path = env.get("GOOGLE_APPLICATION_CREDENTIALS")
        if path:
            logger.info("Using credentials from GOOGLE_APPLICATION_CREDENTIALS: %s", path)
            return self._token_from_document(self._read_file(Path(path)), path)

        for adc_path in get_adc_paths(env):
            logger.debug("Checking ADC path: %s", adc_path)
            if adc_path.exists():
                logger.info("Using Application Default Credentials from: %s", adc_path)
                return self._token_from_document(self._read_file(adc_path), str(adc_path))

        logger.debug("Trying GCP metadata server")
        try:
            return self._token_from_metadata()
        except (requests.RequestException, TokenRequestError, ValueError) as e:
            logger.debug("Metadata server unavailable: %s", e)

        logger.warning("No valid GCP credentials found")
        raise CredentialsNotFoundError()

    def _read_file(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise AuthError(f"Failed to read credentials file: {path}", cause=e) from e

    def _token_from_document(self, text: str, source: str) -> str:
        try:
            creds = json.loads(text)
        except json.JSONDecodeError as e:
            raise AuthError(f"Invalid credentials JSON: {source}", cause=e) from e
        if not isinstance(creds, dict):
            raise AuthError(f"Invalid credentials JSON: {source}")

        cred_type = creds.get("type", "")
        if cred_type == "service_account":
            return self._token_from_service_account(creds)
        if cred_type == "authorized_user":
            return self._token_from_user_credentials(creds)
        raise AuthError(f"Unknown credential type: {cred_type}")

    def _token_from_service_account(self, creds: Dict[str, Any]) -> str:
        client_email = creds.get("client_email")
        private_key = creds.get("private_key")
        if not client_email:
            raise AuthError("Missing client_email in service account")
        if not private_key:
            raise AuthError("Missing private_key in service account")

        token_uri = creds.get("token_uri") or TOKEN_URI
        now = int(time.time())
        claims = {
            "iss": client_email,
            "sub": client_email,
            "aud": token_uri,
            "iat": now,
            "exp": now + 3600,
            "scope": CLOUD_PLATFORM_SCOPE,
        }
        headers = {"kid": creds["private_key_id"]} if creds.get("private_key_id") else None
        try:
            assertion = jwt.encode(claims, private_key, algorithm="RS256", headers=headers)
        except (ValueError, jwt.PyJWTError) as e:
            raise AuthError("Failed to sign service account JWT", cause=e) from e

        return self._exchange(
            token_uri,
            {"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
            source="service_account",
        )

    def _token_from_user_credentials(self, creds: Dict[str, Any]) -> str:
        for key in ("client_id", "client_secret", "refresh_token"):
            if not creds.get(key):
                raise AuthError(f"Missing {key} in user credentials")

        return self._exchange(
            TOKEN_URI,
            {
                "client_id": creds["client_id"],
                "client_secret": creds["client_secret"],
                "refresh_token": creds["refresh_token"],
                "grant_type": "refresh_token",
            },
            source="authorized_user",
        )

    def _exchange(self, url: str, form: Dict[str, str], source: str) -> str:
        """OAuth 토큰 엔드포인트에 폼을 POST하고 토큰을 캐시"""
        try:
            resp = self.session.post(url, data=form, timeout=HTTP_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            raise TokenRequestError(source, body=str(e)) from e

        if not resp.ok:
            raise TokenRequestError(source, status=resp.status_code, body=resp.text)
        return self._store(resp, source)

    def _token_from_metadata(self) -> str:
        resp = self.session.get(METADATA_TOKEN_URL, headers=METADATA_HEADERS, timeout=METADATA_TIMEOUT_SECONDS)
        if not resp.ok:
            raise TokenRequestError("metadata", status=resp.status_code)
        token = self._store(resp, "metadata")
        logger.info("Using token from GCP metadata server")
        return token

    def _store(self, resp: requests.Response, source: str) -> str:
        try:
            data = resp.json()
        except ValueError as e:
            raise TokenRequestError(source, status=resp.status_code, body="invalid JSON") from e
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise TokenRequestError(source, status=resp.status_code, body="missing access_token")
        try:
            expires_in = int(data.get("expires_in") or DEFAULT_EXPIRES_IN)
        except (TypeError, ValueError) as e:
            raise TokenRequestError(source, status=resp.status_code, body="invalid expires_in") from e
        self.cache.set(token, expires_in=expires_in)
        return token

    # =========================================================================
    # 프로젝트
    # =========================================================================

    def get_project(self) -> Optional[str]:
        """기본 프로젝트 ID 추정 (찾지 못하면 None)"""
        env = self.env
        for var in PROJECT_ENV_VARS:
            if env.get(var):
                logger.info("Using project from %s: %s", var, env[var])
                return env[var]

        documents: List[str] = []
        if env.get("GOOGLE_CREDENTIALS"):
            documents.append(env["GOOGLE_CREDENTIALS"])
        if env.get("GOOGLE_APPLICATION_CREDENTIALS"):
            try:
                documents.append(Path(env["GOOGLE_APPLICATION_CREDENTIALS"]).read_text(encoding="utf-8"))
            except OSError as e:
                logger.debug("Cannot read GOOGLE_APPLICATION_CREDENTIALS: %s", e)
        for adc_path in get_adc_paths(env):
            if adc_path.exists():
                try:
                    documents.append(adc_path.read_text(encoding="utf-8"))
                except OSError as e:
                    logger.debug("Cannot read ADC file %s: %s", adc_path, e)

        for text in documents:
            project = _project_from_document(text)
            if project:
                logger.info("Using project from credentials: %s", project)
                return project

        try:
            return self._project_from_metadata()
        except requests.RequestException as e:
            logger.debug("Metadata server unavailable: %s", e)
        return None

    def _project_from_metadata(self) -> Optional[str]:
        resp = self.session.get(METADATA_PROJECT_URL, headers=METADATA_HEADERS, timeout=METADATA_TIMEOUT_SECONDS)
        if not resp.ok:
            return None
        project = resp.text
        # 캡티브 포털이 HTML을 돌려주는 경우
        if "<" in project or ">" in project or "html" in project.lower():
            logger.debug("Metadata server returned HTML instead of project ID")
            return None
        project = project.strip()
        return project or None


def _project_from_document(text: str) -> Optional[str]:
    try:
        creds = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(creds, dict):
        return None
    return creds.get("project_id") or creds.get("quota_project_id") or None
