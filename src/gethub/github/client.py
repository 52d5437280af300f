"""GitHub REST API access for releases and gethub.json manifests."""
import asyncio
import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

import aiohttp

from gethub.constants import (
    CONTENTS_PATH,
    GITHUB_API_BASE,
    GITHUB_API_VERSION,
    GITHUB_REPOS_PATH,
    MANIFEST_PATH,
    RATE_LIMIT_PATH,
    RELEASES_PATH,
    RELEASES_PER_PAGE,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from gethub.errors import RateLimitError, ReleaseSourceError, RepositoryNotFoundError
from gethub.logging import get_logger, log_with_data
from gethub.types import Manifest, RateLimit, Release

logger = get_logger(__name__)


@dataclass(frozen=True)
class GitHubResponse:
    """Status, lowercased headers and decoded JSON body of one API call"""
    status: int
    headers: Mapping[str, str]
    payload: Any


def is_rate_limited(response: GitHubResponse) -> bool:
    if response.status == 429:
        return True
    if response.status != 403:
        return False
    if response.headers.get("x-ratelimit-remaining") == "0":
        return True
    message = response.payload.get("message", "") if isinstance(response.payload, dict) else ""
    return "rate limit" in message.lower()


def decode_manifest(content: str) -> Manifest:
    """Decode the base64 body of a contents API response into a manifest."""
    raw = base64.b64decode("".join(content.split()))
    return Manifest.from_dict(json.loads(raw.decode("utf-8")))


class GitHubReleaseSource:
    """Fetches releases, manifest and quota for one (optional) token."""

    def __init__(self, token: Optional[str] = None):
        self.token = token or None

    def _headers(self) -> dict:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, path: str, params: Optional[dict] = None) -> GitHubResponse:
        url = f"{GITHUB_API_BASE}/{path}"
        timeout = aiohttp.ClientTimeout(total=REQUEST_TIMEOUT)
        async with aiohttp.ClientSession(headers=self._headers(), timeout=timeout) as session:
            async with session.get(url, params=params) as response:
                try:
                    payload = await response.json(content_type=None)
                except ValueError:
                    payload = None
                return GitHubResponse(
                    status=response.status,
                    headers={k.lower(): v for k, v in response.headers.items()},
                    payload=payload,
                )

    async def get_releases(self, owner: str, repo: str) -> Tuple[Release, ...]:
        """Fetch up to one page of releases, newest first.

        Raises:
            RateLimitError: API quota exhausted
            RepositoryNotFoundError: Unknown owner/repo
            ReleaseSourceError: Any other transport or API failure
        """
        path = f"{GITHUB_REPOS_PATH}/{owner}/{repo}/{RELEASES_PATH}"
        try:
            response = await self._request(path, params={"per_page": RELEASES_PER_PAGE})
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ReleaseSourceError(f"Failed to fetch releases from GitHub API: {e}")

        if is_rate_limited(response):
            reset = response.headers.get("x-ratelimit-reset")
            raise RateLimitError(response.status, int(reset) if reset and reset.isdigit() else None)
        if response.status == 404:
            raise RepositoryNotFoundError(owner, repo)
        if response.status != 200 or not isinstance(response.payload, list):
            message = response.payload.get("message") if isinstance(response.payload, dict) else None
            raise ReleaseSourceError(
                f"Failed to fetch releases from GitHub API: {message or f'HTTP {response.status}'}",
                status=response.status,
            )

        try:
            releases = tuple(Release.from_api(item) for item in response.payload)
        except (KeyError, TypeError) as e:
            raise ReleaseSourceError(f"Unexpected release data from GitHub API: {e}")

        log_with_data(logger, logging.INFO, "Releases fetched", {
            "event": "releases_fetched",
            "repository": f"{owner}/{repo}",
            "count": len(releases),
        })
        return releases

    async def get_manifest(self, owner: str, repo: str) -> Optional[Manifest]:
        """Fetch and parse gethub.json; any failure means no manifest."""
        path = f"{GITHUB_REPOS_PATH}/{owner}/{repo}/{CONTENTS_PATH}/{MANIFEST_PATH}"
        try:
            response = await self._request(path)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Failed to fetch manifest for {owner}/{repo}: {e}")
            return None

        if response.status == 404:
            logger.debug(f"No {MANIFEST_PATH} in {owner}/{repo}")
            return None

        content = response.payload.get("content") if isinstance(response.payload, dict) else None
        if response.status != 200 or not isinstance(content, str) or not content:
            logger.warning(f"Unusable manifest response for {owner}/{repo}: HTTP {response.status}")
            return None

        try:
            manifest = decode_manifest(content)
        except ValueError as e:
            logger.warning(f"Failed to parse manifest for {owner}/{repo}: {e}")
            return None

        log_with_data(logger, logging.INFO, "Manifest loaded", {
            "event": "manifest_loaded",
            "repository": f"{owner}/{repo}",
            "version": manifest.version,
            "rules": len(manifest.rules),
        })
        return manifest

    async def fetch_repository(
        self, owner: str, repo: str
    ) -> Tuple[Tuple[Release, ...], Optional[Manifest]]:
        """Fetch releases and manifest concurrently."""
        releases, manifest = await asyncio.gather(
            self.get_releases(owner, repo),
            self.get_manifest(owner, repo),
        )
        return releases, manifest

    async def get_rate_limit(self) -> Optional[RateLimit]:
        """Current core API quota, or None if it cannot be read."""
        try:
            response = await self._request(RATE_LIMIT_PATH)
            rate = response.payload["rate"]
            return RateLimit(
                limit=rate["limit"],
                remaining=rate["remaining"],
                reset=rate["reset"],
                used=rate.get("used", rate["limit"] - rate["remaining"]),
            )
        except (aiohttp.ClientError, asyncio.TimeoutError, KeyError, TypeError) as e:
            logger.warning(f"Failed to get rate limit: {e}")
            return None
