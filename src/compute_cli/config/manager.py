"""Cloud profile store: the TOML file on disk and connection resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import tomli_w

from compute_cli.client.errors import ConfigurationError
from compute_cli.config.constants import (
    CONFIG_FILE,
    DEFAULT_TIMEOUT,
    ENV_AUTH_TOKEN,
    ENV_COMPUTE_PROFILE,
    ENV_COMPUTE_URL,
)
from compute_cli.config.models import CLIConfig, CloudProfile

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

logger = logging.getLogger(__name__)

# Values equal to these are left out of the file
_PROFILE_DEFAULTS: dict[str, Any] = {"verify_ssl": True, "timeout": DEFAULT_TIMEOUT}


def _profile_entry(profile: CloudProfile) -> dict[str, Any]:
    """TOML table for one profile; the name is the table key."""
    entry = profile.model_dump(exclude={"name"}, exclude_none=True)
    return {
        key: value for key, value in entry.items()
        if _PROFILE_DEFAULTS.get(key, object()) != value
    }


def _write_private(path: Path, text: str) -> None:
    """Replace ``path`` with ``text``; the file is readable by its owner only."""
    path.parent.mkdir(parents=True, exist_ok=True)
    os.chmod(path.parent, 0o700)
    staging = path.with_suffix(".tmp")
    fd = os.open(str(staging), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        os.write(fd, text.encode())
    finally:
        os.close(fd)
    staging.replace(path)


class ConfigManager:
    """Named cloud profiles kept in ``config.toml``.

    The file is read lazily on first access to :attr:`config`. Every change
    (add, remove, set-default) writes the whole file back.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: CLIConfig | None = None

    @property
    def config(self) -> CLIConfig:
        if self._config is None:
            self._config = self._read()
        return self._config

    def _read(self) -> CLIConfig:
        if not self.config_path.is_file():
            return CLIConfig()
        logger.debug("Loading cloud profiles from %s", self.config_path)
        with self.config_path.open("rb") as fh:
            raw = tomllib.load(fh)
        profiles = {
            name: CloudProfile(name=name, **table)
            for name, table in raw.get("profiles", {}).items()
        }
        return CLIConfig(
            default_profile=raw.get("default_profile"),
            default_format=raw.get("default_format", "table"),
            profiles=profiles,
        )

    def save(self) -> None:
        cfg = self.config
        document: dict[str, Any] = {}
        if cfg.default_profile:
            document["default_profile"] = cfg.default_profile
        if cfg.default_format != "table":
            document["default_format"] = cfg.default_format
        if cfg.profiles:
            document["profiles"] = {
                name: _profile_entry(profile) for name, profile in cfg.profiles.items()
            }
        _write_private(self.config_path, tomli_w.dumps(document))
        logger.debug("Saved %d cloud profile(s) to %s",
                     len(cfg.profiles), self.config_path)

    def add_profile(self, profile: CloudProfile) -> None:
        """Store ``profile``; the first profile added becomes the default."""
        self.config.profiles[profile.name] = profile
        self.config.default_profile = self.config.default_profile or profile.name
        self.save()

    def remove_profile(self, name: str) -> bool:
        profiles = self.config.profiles
        if profiles.pop(name, None) is None:
            return False
        if self.config.default_profile == name:
            self.config.default_profile = next(iter(profiles), None)
        self.save()
        return True

    def set_default(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        self.config.default_profile = name
        self.save()
        return True

    def get_profile(self, name: str | None = None) -> CloudProfile | None:
        """Profile called ``name``, or the default profile when no name is given."""
        return self.config.profiles.get(name or self.config.default_profile or "")

    def resolve_cloud(
        self,
        profile_name: str | None = None,
        url: str | None = None,
        token: str | None = None,
    ) -> CloudProfile:
        """Work out which compute endpoint to talk to, and with which token.

        Each setting comes from the first source that has it: the explicit
        arguments (CLI flags), then ``COMPUTE_ENDPOINT``/``COMPUTE_AUTH_TOKEN``,
        then the profile named by ``profile_name`` or ``COMPUTE_PROFILE`` or
        the default profile. TLS, timeout and microversion only come from the
        profile.
        """
        profile = self.get_profile(profile_name or os.environ.get(ENV_COMPUTE_PROFILE))

        endpoint = url or os.environ.get(ENV_COMPUTE_URL) or (profile and profile.url)
        if not endpoint:
            raise ConfigurationError(
                "No compute endpoint configured. Use 'compute-cli config add' or set "
                f"{ENV_COMPUTE_URL} or pass --url."
            )
        settings: dict[str, Any] = profile.model_dump() if profile else {"name": "cli"}
        settings["url"] = endpoint
        settings["token"] = (
            token or os.environ.get(ENV_AUTH_TOKEN) or settings.get("token")
        )
        return CloudProfile.model_validate(settings)
