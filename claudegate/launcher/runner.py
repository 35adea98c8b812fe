# -*- coding: utf-8 -*-
"""Spawning the Claude CLI with a profile's environment."""

from __future__ import annotations

import logging
import shlex
import signal
import subprocess
from typing import Dict, List, Optional, Sequence

from ..config import AppConfig, Profile, load_config
from ..constant import DEFAULT_CLAUDE_CLI
from ..providers import get_provider
from .env import build_env_vars, merge_env

logger = logging.getLogger(__name__)

_FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class LaunchError(RuntimeError):
    """The Claude CLI could not be started."""


def claude_command(config: AppConfig, args: Sequence[str]) -> List[str]:
    """Build the argv: configured CLI path (may carry its own flags)
    followed by the user's arguments.
    """
    cli = config.settings.claude_cli_path or DEFAULT_CLAUDE_CLI
    return shlex.split(cli) + list(args)


def run_with_env(command: Sequence[str], env: Dict[str, str]) -> int:
    """Run *command* with inherited stdio, forwarding SIGINT/SIGTERM.

    Returns the child's exit code; death by signal N maps to ``128 + N``.
    """
    try:
        child = subprocess.Popen(list(command), env=env)
    except OSError as exc:
        raise LaunchError(f"Failed to launch Claude: {exc}") from exc

    def _forward(signum, _frame):
        if child.poll() is None:
            child.send_signal(signum)

    previous = {
        sig: signal.signal(sig, _forward) for sig in _FORWARDED_SIGNALS
    }
    try:
        code = child.wait()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    if code < 0:
        return 128 - code
    return code


def launch_claude(
    profile: Profile,
    args: Sequence[str],
    *,
    config: Optional[AppConfig] = None,
) -> int:
    """Launch the Claude CLI for *profile* and return its exit code."""
    if config is None:
        config = load_config()

    provider = get_provider(profile.provider_id)
    if provider is None:
        logger.warning(
            "Profile %s references unknown provider %s; launching with "
            "the ambient environment",
            profile.name,
            profile.provider_id,
        )
    profile_env = build_env_vars(profile, provider)
    command = claude_command(config, args)
    logger.debug(
        "Launching %s with %d profile variables",
        command[0],
        len(profile_env),
    )
    return run_with_env(command, merge_env(profile_env))
