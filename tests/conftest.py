"""Shared test configuration and fixtures for the release scribe test suite."""

import sys
from pathlib import Path

import pytest

# Add the repository root to the Python path so imports work
root_dir = str(Path(__file__).parent.parent)
if root_dir not in sys.path:
    sys.path.insert(0, root_dir)


class FakeResponse:
    def __init__(self, status_code=200, data=None, headers=None, text=""):
        self.status_code = status_code
        self._data = data
        self.headers = headers or {}
        self.text = text

    def json(self):
        if self._data is None:
            raise ValueError("No JSON object could be decoded")
        return self._data


class FakeSession:
    """Stands in for requests.Session; replays queued responses and records calls."""

    def __init__(self, responses=None):
        self.headers = {}
        self.responses = list(responses or [])
        self.calls = []
        self.closed = False

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json, "timeout": timeout})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


class FakeGithubClient:
    """In-memory GithubClient with canned commits and pull request titles."""

    def __init__(self, messages=None, titles=None, fail_on=None):
        self.messages = list(messages or [])
        self.titles = dict(titles or {})
        self.fail_on = fail_on or {}
        self.calls = []
        self.created = []
        self.closed = False

    def _maybe_fail(self, op):
        if op in self.fail_on:
            raise self.fail_on[op]

    def compare_commits(self, owner, repo, base, head, *, per_page=100, max_pages=50):
        self.calls.append(("compare", owner, repo, base, head))
        self._maybe_fail("compare")
        return [
            {"sha": f"{i:040x}", "commit": {"message": message}}
            for i, message in enumerate(self.messages)
        ]

    def get_pull_request(self, owner, repo, number):
        self.calls.append(("pull", number))
        self._maybe_fail(("pull", number))
        return {"number": number, "title": self.titles[number], "html_url": f"https://github.com/{owner}/{repo}/pull/{number}"}

    def create_release(self, owner, repo, payload):
        self.calls.append(("release", payload["tag_name"]))
        self._maybe_fail("release")
        self.created.append(payload)
        return {"id": 1, "html_url": "https://github.com/x/y/releases/1", **payload}

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def fake_client_factory():
    return FakeGithubClient


@pytest.fixture
def clean_env(monkeypatch):
    """Remove SCRIBE_* variables so tests start from a known environment."""
    import os
    for key in list(os.environ):
        if key.startswith("SCRIBE_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
