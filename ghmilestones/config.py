"""Configuration: refresh config models and on-disk locations."""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ghmilestones.errors import ConfigError

DEFAULT_PAGE_SIZE = 30
MAX_PAGE_SIZE = 100


class RepositoryReference(BaseModel):
    """One repository entry in a refresh config."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., validation_alias=AliasChoices("owner", "Owner"))
    repo: str = Field(..., validation_alias=AliasChoices("repo", "Repo", "name"))
    included: bool = Field(True, validation_alias=AliasChoices("included", "Included"))

    @property
    def full_name(self) -> str:
        """Identity used for deduplication, e.g. ``acme/widgets``."""
        return f"{self.owner}/{self.repo}"


class RefreshConfig(BaseModel):
    """Everything one refresh needs to know. Read-only while a refresh runs."""

    model_config = ConfigDict(frozen=True)

    lists: Tuple[RepositoryReference, ...] = Field(
        default=(), validation_alias=AliasChoices("lists", "Lists")
    )
    page_size: int = Field(
        DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        validation_alias=AliasChoices("page_size", "pageSize", "branchLines", "BranchLines"),
    )
    since: Optional[datetime] = Field(None, validation_alias=AliasChoices("since", "Since"))

    @field_validator("since", mode="before")
    @classmethod
    def _parse_since(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                raise ValueError(f"since must be an ISO 8601 date or timestamp, got {value!r}")
        return value

    @field_validator("since")
    @classmethod
    def _since_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # GitHub timestamps are UTC; a naive cutoff is read the same way.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def load_refresh_config(path: Union[str, Path]) -> RefreshConfig:
    """Load a refresh config from a JSON file.

    Args:
        path: Path to the JSON config.

    Returns:
        Validated RefreshConfig.

    Raises:
        ConfigError: If the file is missing, is not JSON, or fails validation.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}")

    try:
        return RefreshConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e


def get_cache_dir() -> Path:
    """Get cache directory path (``$GHMILESTONES_CACHE_DIR`` or ~/.cache/ghmilestones).

    Returns:
        Path to cache directory.
    """
    override = os.getenv("GHMILESTONES_CACHE_DIR")
    if override:
        cache_dir = Path(override)
    else:
        cache_dir = Path.home() / ".cache" / "ghmilestones"
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir
