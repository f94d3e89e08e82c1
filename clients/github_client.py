#!/usr/bin/env python3
"""GitHub REST API client for the three calls the scribe needs.

Compare two refs, get a pull request, create a release. Calls fail fast: there
is no retry adapter, and every non-success status is mapped to a typed
GithubApiError carrying a short code.
"""

import logging
from typing import Dict, List, Any, Optional

import requests

from configs.config import Config

# Set up logging
logger = logging.getLogger(__name__)


class GithubApiError(Exception):
    """Raised when GitHub API operations fail."""
    def __init__(self, message: str, code: str = "UNKNOWN", status: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class GithubAuthError(GithubApiError):
    """Raised when GitHub API authentication fails."""
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message, code="UNAUTHORIZED", status=status)


class GithubClient:
    """Thin REST client over a shared requests session."""
    
    def __init__(self, token: str, timeout_s: Optional[int] = None, base_url: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        """Initialize GitHub client.
        
        Args:
            token: GitHub access token, sent as a bearer token on every call
            timeout_s: Request timeout in seconds (defaults to Config.HTTP_TIMEOUT_S)
            base_url: API root (defaults to Config.GITHUB_API_URL)
            session: Optional pre-built session, mainly for tests
            
        Raises:
            GithubAuthError: If no token is provided
        """
        github_config = Config.get_github_config()
        if not token:
            raise GithubAuthError("GitHub token is required (-token or SCRIBE_TOKEN)")
        self.timeout_s = timeout_s or github_config["timeout_s"]
        self.base_url = (base_url or github_config["base_url"]).rstrip("/")
        
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {token}',
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': '2022-11-28',
            'User-Agent': github_config["user_agent"],
        })
        
        logger.info("GitHub client initialized")

    def _request(self, method: str, url: str, what: str, *, params: Optional[Dict[str, Any]] = None,
                 payload: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = self.session.request(method, url, params=params, json=payload, timeout=self.timeout_s)
        except requests.Timeout as e:
            raise GithubApiError(f"Timeout while fetching {what}: {e}", code="TIMEOUT") from e
        except requests.RequestException as e:
            raise GithubApiError(f"Network error while fetching {what}: {e}", code="NETWORK") from e

        sc = response.status_code
        if sc == 401:
            raise GithubAuthError("Invalid GitHub token or insufficient permissions", status=sc)
        if sc == 403:
            if response.headers.get("X-RateLimit-Remaining") == "0":
                raise GithubApiError("GitHub API rate limit exceeded", code="RATE_LIMIT", status=sc)
            raise GithubAuthError(f"Access denied to {what}", status=sc)
        if sc == 404:
            raise GithubApiError(f"{what} not found", code="NOT_FOUND", status=sc)
        if sc == 429:
            raise GithubApiError("GitHub API rate limit exceeded", code="RATE_LIMIT", status=sc)
        if sc >= 500:
            raise GithubApiError(f"GitHub server error: HTTP {sc}", code="NETWORK", status=sc)
        if sc >= 400:
            raise GithubApiError(f"GitHub API error: HTTP {sc}: {_error_message(response)}", status=sc)

        try:
            return response.json()
        except ValueError as e:
            raise GithubApiError(f"Invalid JSON in response for {what}: {e}", status=sc) from e

    def compare_commits(self, owner: str, repo: str, base: str, head: str, *,
                        per_page: int = 100, max_pages: int = 50) -> List[Dict[str, Any]]:
        """Fetch the commits between two refs via the compare endpoint.
        
        Args:
            owner: Repository owner
            repo: Repository name
            base: Ref the comparison starts from
            head: Ref the comparison ends at
            per_page: Commits requested per page
            max_pages: Safety cap on the number of pages followed
            
        Returns:
            List of raw commit dictionaries, oldest first
            
        Raises:
            GithubApiError: If any page request fails, or the comparison needs
                more than max_pages pages
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/compare/{base}...{head}"
        what = f"comparison {owner}/{repo} {base}...{head}"
        logger.info(f"Comparing commits: {owner}/{repo} {base}...{head}")
        
        all_commits: List[Dict[str, Any]] = []
        page = 1
        while True:
            data = self._request("GET", url, what, params={'page': page, 'per_page': per_page})
            page_commits = data.get("commits") or []
            all_commits.extend(page_commits)
            total = data.get("total_commits")
            if len(page_commits) < per_page or (isinstance(total, int) and len(all_commits) >= total):
                break
            page += 1
            if page > max_pages:
                # a partial commit list would publish a partial release
                raise GithubApiError(
                    f"Comparison {base}...{head} spans more than {max_pages} pages "
                    f"({len(all_commits)} of {total if total is not None else 'unknown'} commits fetched)",
                    code="TRUNCATED",
                )
        
        logger.debug(f"✓ Retrieved {len(all_commits)} commits for {base}...{head}")
        return all_commits

    def get_pull_request(self, owner: str, repo: str, number: int) -> Dict[str, Any]:
        """Fetch pull request metadata.
        
        Raises:
            GithubApiError: If the request fails or the pull request does not exist
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/pulls/{number}"
        logger.info(f"Fetching PR metadata: {owner}/{repo}#{number}")
        data = self._request("GET", url, f"Pull request {owner}/{repo}#{number}")
        logger.debug(f"✓ Retrieved PR: #{data.get('number')} - {(data.get('title') or '')[:50]}")
        return data

    def create_release(self, owner: str, repo: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a release from a payload of tag_name, name, target_commitish and body.
        
        Raises:
            GithubApiError: If GitHub rejects the release
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/releases"
        logger.info(f"Creating release {payload.get('tag_name')} on {owner}/{repo}")
        return self._request("POST", url, f"Releases of {owner}/{repo}", payload=payload)

    def close(self) -> None:
        """Close the GitHub client session."""
        if self.session:
            self.session.close()
            logger.debug("GitHub client session closed")


def _error_message(response) -> str:
    try:
        data = response.json()
    except ValueError:
        return (response.text or "")[:200]
    if isinstance(data, dict):
        return str(data.get("message", ""))[:200]
    return ""
