#!/usr/bin/env python3
"""Publish a release draft to GitHub Releases, or print it on a dry run.

Body size is validated before the single create call. Errors are typed and
never retried.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from clients.github_client import GithubClient, GithubApiError
from configs.config import Config
from utils.scribe_errors import ReleasePublishError
from utils.scribe_models import ReleaseDraft, ReleaseInfo

logger = logging.getLogger(__name__)


class ReleasePublisher:
    def __init__(self, client: GithubClient, *, body_max_chars: Optional[int] = None):
        self.client = client
        self.body_max_chars = body_max_chars if body_max_chars is not None else Config.RELEASE_BODY_MAX_CHARS

    # -------- Public API --------
    def publish(self, owner: str, repo: str, draft: ReleaseDraft, *, dry_run: bool = False) -> Optional[ReleaseInfo]:
        """Create the release, or log it and return None when dry_run is set.

        Raises:
            ReleasePublishError: If the body is too large or GitHub rejects the release
        """
        if dry_run:
            logger.info(f"dry run, release name: {draft.name}")
            logger.info(f"dry run, release target: {draft.target_commitish}")
            logger.info(f"dry run, release body:\n{draft.body}")
            return None

        self._validate_body(draft.body)
        try:
            data = self.client.create_release(owner, repo, draft.to_payload())
        except GithubApiError as e:
            raise ReleasePublishError(str(e), code=e.code) from e

        try:
            release = ReleaseInfo.model_validate(data)
        except ValidationError as e:
            raise ReleasePublishError(f"unexpected response: {e}") from e
        logger.info(f"created release {release.name or release.tag_name}")
        return release

    def _validate_body(self, body: str) -> None:
        if len(body) > self.body_max_chars:
            raise ReleasePublishError(
                f"Release body exceeds limit: len={len(body)} max={self.body_max_chars}",
                code="VALIDATION",
            )
