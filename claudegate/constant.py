# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("CLAUDEGATE_WORKING_DIR", "~/.claudegate"))
    .expanduser()
    .resolve()
)

CONFIG_FILE = os.environ.get("CLAUDEGATE_CONFIG_FILE", "config.json")

CONFIG_VERSION = "1.0.0"

# Env key for app log level (used by both CLI entry points).
LOG_LEVEL_ENV = "CLAUDEGATE_LOG_LEVEL"

# Default API timeout written into new configs (milliseconds).
DEFAULT_TIMEOUT_MS = 3000000

DEFAULT_CLAUDE_CLI = "claude"

# Id of the built-in pseudo-profile that keeps the user's own Claude setup.
NATIVE_PROFILE_ID = "__anthropic_default__"
NATIVE_PROVIDER_ID = "anthropic"

PROFILE_NAME_MAX_LENGTH = 50

# ---------------------------------------------------------------------------
# Environment variables understood by the Claude CLI
# ---------------------------------------------------------------------------
ANTHROPIC_API_KEY = "ANTHROPIC_API_KEY"
ANTHROPIC_AUTH_TOKEN = "ANTHROPIC_AUTH_TOKEN"
ANTHROPIC_BASE_URL = "ANTHROPIC_BASE_URL"
ANTHROPIC_MODEL = "ANTHROPIC_MODEL"
CLAUDE_CODE_SUBAGENT_MODEL = "CLAUDE_CODE_SUBAGENT_MODEL"

# Model slot -> variable that selects the model for that slot.
MODEL_SLOT_ENV_VARS = {
    "haiku": "ANTHROPIC_DEFAULT_HAIKU_MODEL",
    "sonnet": "ANTHROPIC_DEFAULT_SONNET_MODEL",
    "opus": "ANTHROPIC_DEFAULT_OPUS_MODEL",
    "default": ANTHROPIC_MODEL,
    "subagent": CLAUDE_CODE_SUBAGENT_MODEL,
}

# Cap on entries kept from an OpenRouter model listing.
OPENROUTER_MODEL_LIMIT = 100
