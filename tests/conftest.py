"""Shared fixtures for the milestones tests."""

import json
import logging
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient that records every call."""

    def __init__(self, pages, errors=None):
        self.pages = pages
        self.errors = errors or {}
        self.calls = []

    def list_milestones(self, owner, repo, state="open", sort="updated", direction="desc", per_page=30):
        full_name = f"{owner}/{repo}"
        self.calls.append(
            {
                "repo": full_name,
                "state": state,
                "sort": sort,
                "direction": direction,
                "per_page": per_page,
            }
        )
        if (full_name, state) in self.errors:
            raise self.errors[(full_name, state)]
        return self.pages.get(full_name, {}).get(state, [])[:per_page]


@pytest.fixture(autouse=True)
def isolated_cache_dir(tmp_path, monkeypatch):
    """Keep snapshots out of the real home directory."""
    cache_dir = tmp_path / "cache"
    monkeypatch.setenv("GHMILESTONES_CACHE_DIR", str(cache_dir))
    return cache_dir


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installs so they never outlive a captured stream."""
    yield
    logger = logging.getLogger("ghmilestones")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def milestone_pages():
    """Load sample GitHub milestone pages, keyed by repo then state."""
    with open(FIXTURES_DIR / "milestones.json", "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def fake_client(milestone_pages):
    return FakeGitHubClient(milestone_pages)


@pytest.fixture
def make_client(milestone_pages):
    """Build a fake client, optionally failing on given (repo, state) pairs."""

    def _make(pages=None, errors=None):
        return FakeGitHubClient(milestone_pages if pages is None else pages, errors)

    return _make
