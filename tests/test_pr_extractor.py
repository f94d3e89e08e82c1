"""Unit tests for merge commit parsing."""

import pytest

from utils.pr_extractor import extract_pull_request_numbers, parse_pull_request_number
from utils.scribe_models import CommitRecord


def commits(*messages):
    return [CommitRecord(sha=str(i), message=m) for i, m in enumerate(messages)]


class TestParsePullRequestNumber:

    @pytest.mark.parametrize("message,expected", [
        ("Merge pull request #12 from acme/feature", 12),
        ("Merge pull request #7", 7),
        ("Merge pull request #0042 from x\n\nWKS-1 body", 42),
        ("chore: squash\n\nMerge pull request #99 from y", 99),
    ])
    def test_matches(self, message, expected):
        assert parse_pull_request_number(message) == expected

    @pytest.mark.parametrize("message", [
        "",
        "fix typo",
        "Merge branch 'master' into feature",
        "merge pull request #12",
        "Merge pull request #abc",
        "Merge pull request 12",
    ])
    def test_no_match(self, message):
        assert parse_pull_request_number(message) is None


class TestExtractPullRequestNumbers:

    def test_preserves_commit_order(self):
        found = extract_pull_request_numbers(commits(
            "Merge pull request #12 from x",
            "fix typo",
            "Merge pull request #7 from y",
            "Merge pull request #30 from z",
        ))
        assert list(found) == [12, 7, 30]

    def test_empty(self):
        assert list(extract_pull_request_numbers([])) == []

    def test_is_lazy(self):
        gen = extract_pull_request_numbers(iter(commits("Merge pull request #1", "Merge pull request #2")))
        assert next(gen) == 1
        assert next(gen) == 2
        with pytest.raises(StopIteration):
            next(gen)
