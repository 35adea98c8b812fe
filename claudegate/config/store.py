# -*- coding: utf-8 -*-
"""Reading and writing the application config (config.json)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from .. import constant
from .config import AppConfig

logger = logging.getLogger(__name__)

_DIR_MODE = 0o700
_FILE_MODE = 0o600


def get_config_path() -> Path:
    """Return the default config.json path."""
    return constant.WORKING_DIR / constant.CONFIG_FILE


def _ensure_config_dir(path: Path) -> None:
    directory = path.parent
    if not directory.is_dir():
        directory.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load config.json.

    A missing, unreadable or invalid file yields a fresh default config;
    the file on disk is left untouched until the next save.
    """
    if path is None:
        path = get_config_path()

    if not path.is_file():
        logger.debug("No config at %s, using defaults", path)
        return AppConfig()

    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
        return AppConfig.model_validate(raw)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return AppConfig()


def save_config(config: AppConfig, path: Optional[Path] = None) -> None:
    """Replace config.json with *config* (owner read/write only).

    The data is written to a sibling temp file that is renamed over the
    config, so a failed write leaves the previous file intact.
    """
    if path is None:
        path = get_config_path()
    _ensure_config_dir(path)

    out = config.model_dump(mode="json", by_alias=True)
    tmp_path = path.with_suffix(".tmp")
    try:
        fd = os.open(
            tmp_path,
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
            _FILE_MODE,
        )
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(out, fh, indent=2, ensure_ascii=False)
        # O_CREAT only applies the mode to new files.
        os.chmod(tmp_path, _FILE_MODE)
        tmp_path.replace(path)
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink()
        raise
    logger.debug("Saved config to %s", path)
