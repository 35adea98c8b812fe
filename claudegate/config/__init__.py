# -*- coding: utf-8 -*-
from .config import (
    AppConfig,
    AppSettings,
    Profile,
    SelectedModel,
    SelectedModels,
)
from .store import get_config_path, load_config, save_config

__all__ = [
    "AppConfig",
    "AppSettings",
    "Profile",
    "SelectedModel",
    "SelectedModels",
    "get_config_path",
    "load_config",
    "save_config",
]
