#!/usr/bin/env python3
"""Pull merged pull request numbers out of commit messages."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from utils.scribe_errors import PullRequestParseError
from utils.scribe_models import CommitRecord

PULL_REQUEST_RE = re.compile(r"Merge pull request #(\d+)")


def parse_pull_request_number(message: str) -> Optional[int]:
    """Return the pull request number of a merge commit message, or None.

    Raises:
        PullRequestParseError: If the matched digits do not parse as an int
    """
    if not message:
        return None
    match = PULL_REQUEST_RE.search(message)
    if not match:
        return None
    digits = match.group(1)
    try:
        return int(digits)
    except ValueError as e:
        raise PullRequestParseError(f"{digits!r}: {e}", code="VALIDATION") from e


def extract_pull_request_numbers(commits: Iterable[CommitRecord]) -> Iterator[int]:
    """Yield pull request numbers in commit order, skipping non-merge commits."""
    for commit in commits:
        number = parse_pull_request_number(commit.message)
        if number is not None:
            yield number
