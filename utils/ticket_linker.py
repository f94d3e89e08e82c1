#!/usr/bin/env python3
"""Rewrite JIRA ticket identifiers in pull request titles as markdown links.

Text that is already a markdown link is left alone, so rewriting an already
rewritten title is a no-op.
"""

from __future__ import annotations

import re
from typing import List, Optional, Pattern

MARKDOWN_LINK_RE = re.compile(r"\[[^\]\n]*\]\([^)\s]*\)")


def normalize_host(host: str) -> str:
    """Strip scheme and trailing slashes so 'https://x.atlassian.net/' becomes 'x.atlassian.net'."""
    host = (host or "").strip()
    for scheme in ("https://", "http://"):
        if host.lower().startswith(scheme):
            host = host[len(scheme):]
            break
    return host.rstrip("/")


def ticket_link(ticket: str, host: str) -> str:
    return f"[{ticket}](https://{host}/browse/{ticket})"


class TicketLinker:
    def __init__(self, ticket_regex: Optional[Pattern[str]], host: str) -> None:
        self.ticket_regex = ticket_regex
        self.host = normalize_host(host)

    def _link_tickets(self, text: str) -> str:
        if not text:
            return text
        return self.ticket_regex.sub(lambda m: ticket_link(m.group(0), self.host), text)

    def rewrite(self, title: str) -> str:
        if not title or self.ticket_regex is None:
            return title

        # only the text between existing links is rewritten
        parts: List[str] = []
        pos = 0
        for link in MARKDOWN_LINK_RE.finditer(title):
            parts.append(self._link_tickets(title[pos:link.start()]))
            parts.append(link.group(0))
            pos = link.end()
        parts.append(self._link_tickets(title[pos:]))
        return "".join(parts)
