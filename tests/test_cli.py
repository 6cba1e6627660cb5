"""Tests for the command line interface."""

import json
from unittest.mock import patch

import pytest

from ghmilestones.cli import main
from ghmilestones.errors import GitHubAuthError


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "lists": [
                    {"owner": "acme", "repo": "widgets", "included": True},
                    {"owner": "acme", "repo": "gadgets", "included": True},
                    {"owner": "acme", "repo": "widgets", "included": True},
                ],
                "page_size": 20,
                "since": "2024-01-01",
            }
        ),
        encoding="utf-8",
    )
    return path


def run_refresh(config_path, snapshot, client):
    with patch("ghmilestones.cli.GitHubClient", return_value=client) as client_cls:
        main(["refresh", "--config", str(config_path), "--snapshot", str(snapshot), "--token", "t"])
    client_cls.assert_called_once_with(token="t")


def test_refresh_writes_snapshot(config_path, tmp_path, fake_client, capsys):
    snapshot = tmp_path / "snap.json"
    run_refresh(config_path, snapshot, fake_client)

    out = capsys.readouterr().out
    assert "✓ Refreshed 5 milestones" in out
    assert "Open: 3" in out
    assert "Closed: 2" in out
    assert snapshot.exists()
    assert len(fake_client.calls) == 4


def test_refresh_failure_exits(config_path, tmp_path, make_client, capsys):
    client = make_client(errors={("acme/widgets", "open"): GitHubAuthError("HTTP 401", 401, "/x")})
    snapshot = tmp_path / "snap.json"
    with pytest.raises(SystemExit) as excinfo:
        run_refresh(config_path, snapshot, client)

    assert excinfo.value.code == 1
    assert "✗ Error: HTTP 401" in capsys.readouterr().err
    assert not snapshot.exists()


def test_refresh_bad_config_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["refresh", "--config", str(tmp_path / "missing.json")])
    assert excinfo.value.code == 1
    assert "Config file not found" in capsys.readouterr().err


def test_render_html_to_stdout(config_path, tmp_path, fake_client, capsys):
    snapshot = tmp_path / "snap.json"
    run_refresh(config_path, snapshot, fake_client)
    capsys.readouterr()

    main(["render", "--config", str(config_path), "--snapshot", str(snapshot)])
    out = capsys.readouterr().out
    assert 'class="section-github-render"' in out
    assert "acme/gadgets - Q2" in out


def test_render_markdown_to_file(config_path, tmp_path, fake_client, capsys):
    snapshot = tmp_path / "snap.json"
    run_refresh(config_path, snapshot, fake_client)

    output = tmp_path / "report.md"
    main(
        [
            "render",
            "--config",
            str(config_path),
            "--snapshot",
            str(snapshot),
            "--format",
            "markdown",
            "--output",
            str(output),
        ]
    )
    assert "✓ Report generated" in capsys.readouterr().out
    assert "- **Open**: 3" in output.read_text(encoding="utf-8")


def test_refresh_and_render_with_default_snapshot_location(config_path, fake_client, capsys):
    with patch("ghmilestones.cli.GitHubClient", return_value=fake_client):
        main(["refresh", "--config", str(config_path)])
    main(["render", "--config", str(config_path), "--format", "markdown"])
    assert "acme/widgets - v2.0" in capsys.readouterr().out


def test_render_without_snapshot_exits(config_path, tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["render", "--config", str(config_path), "--snapshot", str(tmp_path / "none.json")])
    assert excinfo.value.code == 1
    assert "No snapshot found" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "usage" in capsys.readouterr().out.lower()
