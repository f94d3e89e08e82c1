#!/usr/bin/env python3
"""Turn pull request numbers into release lines and a release draft.

The pipeline is two lazily chained generators: extract_pull_request_numbers
feeds resolve_release_lines one number at a time, and compose_body drains the
lines in the order they were produced.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Iterator, Optional

from clients.github_client import GithubClient, GithubApiError
from configs.config import Config
from utils.scribe_errors import PullRequestTitleError
from utils.scribe_models import PullRequestInfo, ReleaseDraft
from utils.ticket_linker import TicketLinker

logger = logging.getLogger(__name__)


def make_release_name(now: Optional[datetime] = None) -> str:
    """Release name from local time, e.g. 2024-03-07.1605."""
    return (now or datetime.now()).strftime(Config.RELEASE_NAME_FORMAT)


def format_release_line(title: str, number: int) -> str:
    return f"- {title} #{number}"


def fetch_pull_request(client: GithubClient, owner: str, repo: str, number: int) -> PullRequestInfo:
    try:
        data = client.get_pull_request(owner, repo, number)
    except GithubApiError as e:
        raise PullRequestTitleError(str(e), code=e.code) from e
    return PullRequestInfo(number=number, title=data.get("title") or "", html_url=data.get("html_url"))


def resolve_release_lines(
    client: GithubClient,
    owner: str,
    repo: str,
    numbers: Iterable[int],
    linker: TicketLinker,
) -> Iterator[str]:
    """Yield one formatted line per pull request number, in input order.

    Titles are fetched one at a time as numbers arrive.

    Raises:
        PullRequestTitleError: If any pull request cannot be fetched
    """
    for number in numbers:
        pr = fetch_pull_request(client, owner, repo, number)
        yield format_release_line(linker.rewrite(pr.title), pr.number)


def compose_body(lines: Iterable[str]) -> str:
    collected = list(lines)
    logger.info(f"Collected {len(collected)} release lines")
    return "\n".join(collected)


def build_release_draft(lines: Iterable[str], target_commitish: str, now: Optional[datetime] = None) -> ReleaseDraft:
    # drain first so the name reflects when the body was finished
    body = compose_body(lines)
    name = make_release_name(now)
    return ReleaseDraft(tag_name=name, name=name, target_commitish=target_commitish, body=body)
