"""Path resolution utilities for blogpress configuration."""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def resolve_path(path: str | Path, base_dir: Path | None) -> Path:
    """Resolve a path, making it relative to base_dir if it's relative."""
    path_obj = Path(os.path.expanduser(str(path)))

    if path_obj.is_absolute() or base_dir is None:
        return path_obj

    return base_dir / path_obj


def resolve_model_paths(obj: Any, base_dir: Path) -> None:
    """Resolve every Path field of a pydantic model tree against base_dir.

    Only typed Path fields are touched; plain strings (URLs, class names,
    markers) are left alone.
    """
    if isinstance(obj, list):
        for item in obj:
            resolve_model_paths(item, base_dir)
        return

    if not isinstance(obj, BaseModel):
        return

    for field_name in obj.__class__.model_fields:
        value = getattr(obj, field_name)
        if isinstance(value, Path):
            setattr(obj, field_name, resolve_path(value, base_dir))
        elif isinstance(value, BaseModel | list):
            resolve_model_paths(value, base_dir)
