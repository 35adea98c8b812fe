# -*- coding: utf-8 -*-
"""Profile CRUD on top of config.json.

Every mutator follows load → modify → save → return, so each change is a
single whole-file write of the config.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..config import Profile, SelectedModels, load_config, save_config
from ..constant import (
    NATIVE_PROFILE_ID,
    NATIVE_PROVIDER_ID,
    PROFILE_NAME_MAX_LENGTH,
)

logger = logging.getLogger(__name__)


def now_iso() -> str:
    """Current UTC time as ``2025-01-01T00:00:00.000Z``."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def native_profile() -> Profile:
    """The built-in profile that keeps the user's own Claude setup."""
    return Profile(
        id=NATIVE_PROFILE_ID,
        name="Anthropic (Default)",
        provider_id=NATIVE_PROVIDER_ID,
    )


def validate_profile_name(name: str) -> Optional[str]:
    """Return an error message for an invalid name, ``None`` if valid."""
    if not name or not name.strip():
        return "Profile name is required"
    if len(name) > PROFILE_NAME_MAX_LENGTH:
        return (
            f"Profile name must be {PROFILE_NAME_MAX_LENGTH} characters "
            "or less"
        )
    return None


def _check_name(name: str) -> None:
    error = validate_profile_name(name)
    if error:
        raise ValueError(error)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_all_profiles() -> List[Profile]:
    return load_config().profiles


def get_active_profile_id() -> Optional[str]:
    return load_config().active_profile_id


def get_active_profile() -> Optional[Profile]:
    """Return the active profile, the native profile for the sentinel id,
    or ``None`` when nothing (or a deleted profile) is active.
    """
    config = load_config()
    if config.active_profile_id is None:
        return None
    if config.active_profile_id == NATIVE_PROFILE_ID:
        return native_profile()
    return config.find_profile(config.active_profile_id)


def get_profile_by_id(profile_id: str) -> Optional[Profile]:
    return load_config().find_profile(profile_id)


def get_profile_by_name(name: str) -> Optional[Profile]:
    """Return the first profile called *name* (names are not unique)."""
    for profile in load_config().profiles:
        if profile.name == name:
            return profile
    return None


# ---------------------------------------------------------------------------
# Mutators (load → modify → save → return)
# ---------------------------------------------------------------------------


def create_profile(
    name: str,
    provider_id: str,
    env_vars: Dict[str, str],
    selected_models: Optional[SelectedModels] = None,
) -> Profile:
    """Create and persist a new profile. Raises ``ValueError`` on a bad
    name.
    """
    _check_name(name)
    config = load_config()

    stamp = now_iso()
    profile = Profile(
        id=str(uuid.uuid4()),
        name=name,
        provider_id=provider_id,
        created_at=stamp,
        updated_at=stamp,
        env_vars=dict(env_vars),
        selected_models=selected_models,
    )
    config.profiles.append(profile)
    save_config(config)
    logger.info("Created profile %s (%s)", profile.id, provider_id)
    return profile


def update_profile(
    profile_id: str,
    *,
    name: Optional[str] = None,
    env_vars: Optional[Dict[str, str]] = None,
    selected_models: Optional[SelectedModels] = None,
) -> Optional[Profile]:
    """Apply the given changes and bump ``updated_at``.

    Returns the updated profile, or ``None`` if *profile_id* is unknown.
    """
    if name is not None:
        _check_name(name)
    config = load_config()
    profile = config.find_profile(profile_id)
    if profile is None:
        return None

    if name is not None:
        profile.name = name
    if env_vars is not None:
        profile.env_vars = dict(env_vars)
    if selected_models is not None:
        profile.selected_models = selected_models
    profile.updated_at = now_iso()

    save_config(config)
    return profile


def delete_profile(profile_id: str) -> bool:
    """Delete a profile; clears the active pointer in the same save."""
    config = load_config()
    remaining = [p for p in config.profiles if p.id != profile_id]
    if len(remaining) == len(config.profiles):
        return False

    config.profiles = remaining
    if config.active_profile_id == profile_id:
        config.active_profile_id = None
    save_config(config)
    logger.info("Deleted profile %s", profile_id)
    return True


def set_active_profile(profile_id: str) -> bool:
    """Point the active profile at *profile_id* (or the native sentinel)."""
    config = load_config()
    if (
        profile_id != NATIVE_PROFILE_ID
        and config.find_profile(profile_id) is None
    ):
        return False
    config.active_profile_id = profile_id
    save_config(config)
    return True
