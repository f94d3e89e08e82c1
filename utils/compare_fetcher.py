#!/usr/bin/env python3
"""Fetch the ordered commits between two refs."""

import logging
from typing import List

from clients.github_client import GithubClient, GithubApiError
from configs.config import Config
from utils.scribe_errors import CompareFetchError
from utils.scribe_models import CommitRecord

logger = logging.getLogger(__name__)


def fetch_commits(client: GithubClient, owner: str, repo: str, start: str, end: str) -> List[CommitRecord]:
    """Return the commits introduced between start and end, in API order (oldest first).
    
    Raises:
        CompareFetchError: On any transport or API failure; nothing is retried
    """
    cfg = Config.get_compare_config()
    try:
        raw = client.compare_commits(owner, repo, start, end, per_page=cfg["per_page"], max_pages=cfg["max_pages"])
    except GithubApiError as e:
        raise CompareFetchError(str(e), code=e.code) from e
    commits = [CommitRecord.from_api(item) for item in raw]
    logger.info(f"Found {len(commits)} commits between {start} and {end}")
    return commits
