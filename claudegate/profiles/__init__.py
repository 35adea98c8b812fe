# -*- coding: utf-8 -*-
"""Profile management on top of the persisted config."""

from .store import (
    create_profile,
    delete_profile,
    get_active_profile,
    get_active_profile_id,
    get_all_profiles,
    get_profile_by_id,
    get_profile_by_name,
    native_profile,
    now_iso,
    set_active_profile,
    update_profile,
    validate_profile_name,
)

__all__ = [
    "create_profile",
    "delete_profile",
    "get_active_profile",
    "get_active_profile_id",
    "get_all_profiles",
    "get_profile_by_id",
    "get_profile_by_name",
    "native_profile",
    "now_iso",
    "set_active_profile",
    "update_profile",
    "validate_profile_name",
]
