"""File-based store for the last refresh result of a config."""

import hashlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ghmilestones.config import RefreshConfig, get_cache_dir
from ghmilestones.milestones import resolve_repositories
from ghmilestones.models import RefreshResult

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Keeps one RefreshResult per config on disk, for rendering later."""

    def __init__(self, base_path: Optional[Path] = None):
        """Initialize snapshot store.

        Args:
            base_path: Base path for snapshots. Defaults to the cache directory.
        """
        if base_path is None:
            base_path = get_cache_dir() / "snapshots"
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def key_for(self, config: RefreshConfig) -> str:
        """Generate snapshot key.

        Configs that query the same repositories the same way share a key.
        """
        params = {
            "repos": [ref.full_name for ref in resolve_repositories(config.lists)],
            "page_size": config.page_size,
            "since": config.since.isoformat() if config.since else None,
        }
        params_str = json.dumps(params, sort_keys=True)
        params_hash = hashlib.md5(params_str.encode()).hexdigest()[:12]
        return f"milestones_{params_hash}.json"

    def path_for(self, key: str) -> Path:
        return self.base_path / key

    def load(self, key: str) -> Optional[RefreshResult]:
        """Get a stored result.

        Args:
            key: Snapshot key.

        Returns:
            Stored result or None if missing or unreadable.
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return RefreshResult.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError, OSError) as e:
            logger.warning("Ignoring unreadable snapshot %s: %s", path, e)
            return None

    def save(self, key: str, result: RefreshResult) -> Path:
        """Store a result, replacing any previous one.

        Args:
            key: Snapshot key.
            result: Result to store.

        Returns:
            Path of the snapshot file.
        """
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(result.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return path
