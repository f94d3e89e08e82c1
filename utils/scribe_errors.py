#!/usr/bin/env python3
"""Typed pipeline errors.

Each stage wraps the underlying failure with its context prefix, so the single
top-level handler can log str(error) as one line and exit.
"""

from __future__ import annotations


class ScribeError(Exception):
    """Base for fatal pipeline errors, with a typed code for friendly handling."""
    prefix = "failed"

    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        super().__init__(f"{self.prefix}: {message}")
        self.code = code


class CompareFetchError(ScribeError):
    prefix = "failed comparing commits"


class PullRequestParseError(ScribeError):
    prefix = "failed parsing pull request number"


class PullRequestTitleError(ScribeError):
    prefix = "failed getting pull request"


class ReleasePublishError(ScribeError):
    prefix = "failed creating release"
