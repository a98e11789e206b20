"""Typed view over the config map the CLI reads from ``.destined``."""

from pathlib import Path
from typing import Dict, FrozenSet

from pydantic import BaseModel

REQUIRED_KEYS: FrozenSet[str] = frozenset({"todo_file", "history_file", "editor"})

DEFAULT_KEYS: Dict[str, str] = {
    "undo_dir": ".destined-undo",
}


class DestinedSettings(BaseModel):
    todo_file: Path
    history_file: Path
    editor: str
    undo_dir: Path = Path(DEFAULT_KEYS["undo_dir"])
