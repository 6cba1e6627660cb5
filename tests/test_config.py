"""Tests for refresh config loading."""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from ghmilestones.config import (
    DEFAULT_PAGE_SIZE,
    RefreshConfig,
    RepositoryReference,
    get_cache_dir,
    load_refresh_config,
)
from ghmilestones.errors import ConfigError


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_snake_case_config(tmp_path):
    path = write_config(
        tmp_path,
        {
            "lists": [
                {"owner": "acme", "repo": "widgets", "included": True},
                {"owner": "acme", "repo": "gadgets", "included": False},
            ],
            "page_size": 50,
            "since": "2024-01-01",
        },
    )
    config = load_refresh_config(path)

    assert [r.full_name for r in config.lists] == ["acme/widgets", "acme/gadgets"]
    assert config.lists[1].included is False
    assert config.page_size == 50
    assert config.since == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_load_section_editor_keys(tmp_path):
    path = write_config(
        tmp_path,
        {
            "Lists": [{"Owner": "acme", "Repo": "widgets", "Included": True}],
            "branchLines": 15,
            "since": "2024-02-03T04:05:06Z",
        },
    )
    config = load_refresh_config(path)

    assert config.lists == (RepositoryReference(owner="acme", repo="widgets", included=True),)
    assert config.page_size == 15
    assert config.since == datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc)


def test_defaults():
    config = RefreshConfig()
    assert config.lists == ()
    assert config.page_size == DEFAULT_PAGE_SIZE
    assert config.since is None


def test_included_defaults_to_true():
    assert RepositoryReference(owner="acme", repo="widgets").included is True


def test_empty_since_means_no_cutoff():
    assert RefreshConfig(since="").since is None


def test_since_keeps_explicit_offset():
    config = RefreshConfig(since="2024-01-01T00:00:00+02:00")
    assert config.since == datetime(2023, 12, 31, 22, 0, tzinfo=timezone.utc)


def test_bad_since_is_rejected():
    with pytest.raises(ValidationError):
        RefreshConfig(since="last tuesday")


@pytest.mark.parametrize("page_size", [0, 101])
def test_page_size_bounds(page_size):
    with pytest.raises(ValidationError):
        RefreshConfig(page_size=page_size)


def test_config_is_frozen():
    config = RefreshConfig()
    with pytest.raises(ValidationError):
        config.page_size = 10


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_refresh_config(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid JSON"):
        load_refresh_config(path)


def test_invalid_config(tmp_path):
    path = write_config(tmp_path, {"lists": [{"owner": "acme"}]})
    with pytest.raises(ConfigError, match="Invalid config"):
        load_refresh_config(path)


def test_cache_dir_from_environment(isolated_cache_dir):
    assert get_cache_dir() == isolated_cache_dir
    assert isolated_cache_dir.is_dir()
