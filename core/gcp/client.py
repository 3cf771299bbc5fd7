"""
core/gcp/client.py - GCP REST 클라이언트

Bearer 토큰 인증으로 GCP REST API를 호출하고 JSON 트리를 반환합니다.
프로젝트/존/리전 컨텍스트를 함께 들고 다니며 URL 보간에 사용됩니다.

Usage:
    from core.gcp.client import GcpClient

    client = GcpClient(project="my-project", zone="us-central1-a")
    data = client.request("GET", "https://compute.googleapis.com/...")
"""

import json
import logging
from typing import Any, List, Optional

import requests

from core.config import DEFAULT_ZONE, HTTP_TIMEOUT_SECONDS
from core.exceptions import DispatchError, MalformedResponseError, UpstreamRequestError

from .auth import TokenProvider

logger = logging.getLogger(__name__)

PROJECTS_URL = "https://cloudresourcemanager.googleapis.com/v1/projects?filter=lifecycleState:ACTIVE"

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def derive_region(zone: str) -> str:
    """존에서 리전 추출 (마지막 '-' 세그먼트 제거)

    Example:
        >>> derive_region("us-central1-a")
        'us-central1'
    """
    if "-" not in zone:
        return zone
    return zone.rsplit("-", 1)[0]


class GcpClient:
    """GCP REST 클라이언트

    Attributes:
        project: 현재 프로젝트 ID ("" 이면 미선택)
        zone: 현재 존
        region: 존에서 파생된 리전
    """

    def __init__(
        self,
        project: Optional[str] = None,
        zone: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ):
        self.token_provider = token_provider or TokenProvider()
        self.session = session or requests.Session()
        self.timeout = timeout
        self.project = project or ""
        self.zone = zone or DEFAULT_ZONE
        self.region = derive_region(self.zone)
        logger.info(
            "GCP client initialized: project=%s, zone=%s, region=%s",
            self.project or "<none>",
            self.zone,
            self.region,
        )

    def set_zone(self, zone: str) -> None:
        self.zone = zone
        self.region = derive_region(zone)

    def set_project(self, project: str) -> None:
        self.project = project

    @property
    def has_project(self) -> bool:
        return bool(self.project)

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token_provider.get_token()}",
            "Content-Type": "application/json",
        }

    def request(self, method: str, url: str) -> Any:
        """GCP API 호출

        Args:
            method: HTTP 메서드 (알 수 없으면 GET)
            url: 완성된 URL

        Returns:
            응답 JSON 트리 (본문이 비면 {"status": "success"})

        Raises:
            UpstreamRequestError: 2xx 이외의 응답
            MalformedResponseError: 본문이 JSON이 아님
            DispatchError: 전송 계층 오류
        """
        verb = method.upper()
        if verb not in SUPPORTED_METHODS:
            verb = "GET"
        logger.debug("GCP API request: %s %s", verb, url)

        headers = self._headers()
        try:
            resp = self.session.request(verb, url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise DispatchError(f"Request failed: {verb} {url}", cause=e) from e

        logger.debug("GCP API response: %s %s -> %s", verb, url, resp.status_code)
        if not 200 <= resp.status_code < 300:
            logger.error("GCP API Error %s: %s %s\nResponse: %s", resp.status_code, verb, url, resp.text)
            raise UpstreamRequestError(resp.status_code, resp.text, method=verb, url=url)

        text = resp.text
        if not text:
            logger.debug("Empty response body, returning success")
            return {"status": "success"}

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(url, cause=e) from e

    def list_projects(self) -> List[str]:
        """접근 가능한 ACTIVE 프로젝트 ID 목록"""
        logger.debug("Listing GCP projects")
        data = self.request("GET", PROJECTS_URL)
        projects = data.get("projects") if isinstance(data, dict) else None
        if not isinstance(projects, list):
            return []
        result = [p["projectId"] for p in projects if isinstance(p, dict) and isinstance(p.get("projectId"), str)]
        logger.info("Found %d projects", len(result))
        return result
