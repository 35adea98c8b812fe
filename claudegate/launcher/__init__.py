# -*- coding: utf-8 -*-
"""Environment resolution and process launching."""

from .env import build_env_vars, merge_env
from .runner import LaunchError, claude_command, launch_claude, run_with_env

__all__ = [
    "LaunchError",
    "build_env_vars",
    "claude_command",
    "launch_claude",
    "merge_env",
    "run_with_env",
]
