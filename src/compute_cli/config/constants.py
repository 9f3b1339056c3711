"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "compute-cli"
APP_AUTHOR = "compute-cli"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_COMPUTE_URL = "COMPUTE_ENDPOINT"
ENV_AUTH_TOKEN = "COMPUTE_AUTH_TOKEN"
ENV_COMPUTE_PROFILE = "COMPUTE_PROFILE"

# API defaults
DEFAULT_TIMEOUT = 30.0
