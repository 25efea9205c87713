"""GitHub API: list an organisation's repositories."""

from __future__ import annotations

import json
import logging
import re
import time
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import quote, urlencode

from pydantic import ValidationError

from .constants import (
    API_BASE,
    GITHUB_API_ACCEPT,
    GITHUB_API_VERSION,
    HTTP_TIMEOUT_SEC,
    PER_PAGE,
    REPO_TYPE,
    TOKEN_ENV,
    USER_AGENT,
)
from .types import Repository

log = logging.getLogger(__name__)

_NEXT_LINK_RE = re.compile(r'<([^>]+)>\s*;\s*rel="?next"?')


class GitHubError(RuntimeError):
    pass


def parse_next_link(header: str | None) -> str | None:
    """Return the rel="next" URL of a Link header, or None on the last page."""
    if not header:
        return None
    for part in header.split(","):
        m = _NEXT_LINK_RE.search(part)
        if m:
            return m.group(1)
    return None


def _rate_limit_message(e: urllib.error.HTTPError) -> str | None:
    if e.code not in (403, 429) or e.headers.get("X-RateLimit-Remaining") != "0":
        return None
    reset = e.headers.get("X-RateLimit-Reset")
    if reset and reset.isdigit():
        when = time.strftime("%Y-%m-%d %H:%M:%S %Z", time.localtime(int(reset)))
        return f"GitHub API rate limit exceeded (resets at {when})"
    return "GitHub API rate limit exceeded"


class GitHubClient:
    def __init__(self, token: str | None, api_base: str = API_BASE) -> None:
        if not token:
            raise GitHubError(f"{TOKEN_ENV} is required to list repositories")
        self.token = token
        self.api_base = api_base.rstrip("/")

    # ---------- low-level HTTP ----------
    def _request_page(self, url: str) -> tuple[Any, str | None]:
        """GET one page; returns (decoded JSON, next page URL)."""
        req = urllib.request.Request(url)
        req.add_header("Accept", GITHUB_API_ACCEPT)
        req.add_header("X-GitHub-Api-Version", GITHUB_API_VERSION)
        req.add_header("User-Agent", USER_AGENT)
        req.add_header("Authorization", f"Bearer {self.token}")
        log.debug("GET %s", url)
        try:
            with urllib.request.urlopen(req, timeout=HTTP_TIMEOUT_SEC) as resp:
                body = resp.read()
                next_url = parse_next_link(resp.headers.get("Link"))
        except urllib.error.HTTPError as e:
            msg = _rate_limit_message(e) or f"GET {url}: {e.code} {e.reason}"
            raise GitHubError(msg) from e
        except urllib.error.URLError as e:
            raise GitHubError(f"GET {url}: {e.reason}") from e
        try:
            return json.loads(body.decode("utf-8")), next_url
        except ValueError as e:
            raise GitHubError(f"GET {url}: invalid JSON response") from e

    # ---------- public API ----------
    def org_repos_url(self, org: str) -> str:
        query = urlencode({"per_page": PER_PAGE, "type": REPO_TYPE})
        return f"{self.api_base}/orgs/{quote(org, safe='')}/repos?{query}"

    def list_org_repos(self, org: str) -> list[Repository]:
        """Every repository of org, archived ones included; any page failure fails the call."""
        repos: list[Repository] = []
        url: str | None = self.org_repos_url(org)
        while url:
            data, url = self._request_page(url)
            if not isinstance(data, list):
                raise GitHubError(f"unexpected response listing repositories for {org!r}")
            try:
                repos.extend(Repository.model_validate(r) for r in data)
            except ValidationError as e:
                raise GitHubError(f"malformed repository entry for {org!r}: {e}") from e
        log.debug("listed %d repositories for %s", len(repos), org)
        return repos
