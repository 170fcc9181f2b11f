"""Global configuration data structures and loading.

Provides immutable configuration loaded from ~/.sourcectl/config.toml at the
CLI entry point.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import tomlkit

CONFIG_KEYS = ("powershell_executable", "force_bootstrap")


@dataclass(frozen=True)
class SourceConfig:
    """Immutable configuration data.

    Attributes:
        powershell_executable: Name or path of the pwsh binary
        force_bootstrap: Install missing package providers on query
        messages: Message template overrides keyed by message id
    """

    powershell_executable: str = "pwsh"
    force_bootstrap: bool = True
    messages: dict[str, str] = field(default_factory=dict)

    def with_value(self, key: str, value: str) -> "SourceConfig":
        """Return a copy with one top-level key set from its string form.

        Raises:
            ValueError: If key is unknown or value cannot be converted
        """
        if key == "powershell_executable":
            if not value.strip():
                raise ValueError("powershell_executable cannot be empty")
            return replace(self, powershell_executable=value)
        if key == "force_bootstrap":
            return replace(self, force_bootstrap=_parse_bool(value, key))
        msg = f"Unknown config key: {key}. Valid keys: {', '.join(CONFIG_KEYS)}"
        raise ValueError(msg)


def _parse_bool(value: str, key: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    msg = f"Invalid boolean for {key}: {value!r} (use true or false)"
    raise ValueError(msg)


def parse_config(data: dict[str, Any], source: Path) -> SourceConfig:
    """Build SourceConfig from decoded TOML data.

    Raises:
        ValueError: If a value has the wrong type
    """
    defaults = SourceConfig()

    executable = data.get("powershell_executable", defaults.powershell_executable)
    if not isinstance(executable, str) or not executable.strip():
        raise ValueError(f"'powershell_executable' must be a non-empty string in {source}")

    force_bootstrap = data.get("force_bootstrap", defaults.force_bootstrap)
    if not isinstance(force_bootstrap, bool):
        raise ValueError(f"'force_bootstrap' must be true or false in {source}")

    messages = data.get("messages", {})
    if not isinstance(messages, dict) or not all(
        isinstance(v, str) for v in messages.values()
    ):
        raise ValueError(f"[messages] must map message ids to strings in {source}")

    return SourceConfig(
        powershell_executable=executable,
        force_bootstrap=force_bootstrap,
        messages={str(k): v for k, v in messages.items()},
    )


class ConfigStore(ABC):
    """Abstract interface for config access.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if config exists."""
        ...

    @abstractmethod
    def load(self) -> SourceConfig:
        """Load config.

        Raises:
            FileNotFoundError: If config doesn't exist
            ValueError: If config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: SourceConfig) -> None:
        """Save config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for error messages and debugging)."""
        ...

    def load_or_default(self) -> SourceConfig:
        """Load config, falling back to defaults when none exists yet."""
        if not self.exists():
            return SourceConfig()
        return self.load()


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.sourcectl/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> SourceConfig:
        config_path = self.path()
        if not config_path.exists():
            raise FileNotFoundError(f"Config not found at {config_path}")

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
        return parse_config(data, config_path)

    def save(self, config: SourceConfig) -> None:
        """Save config, preserving comments and layout of an existing file.

        Raises:
            PermissionError: If directory or file cannot be written
        """
        config_path = self.path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Cannot write to directory: {parent}\n"
                f"The directory exists but is not writable."
            )
        parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("sourcectl configuration"))

        doc["powershell_executable"] = config.powershell_executable
        doc["force_bootstrap"] = config.force_bootstrap
        if config.messages:
            messages = tomlkit.table()
            for key, template in config.messages.items():
                messages[key] = template
            doc["messages"] = messages
        elif "messages" in doc:
            del doc["messages"]

        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".sourcectl" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: SourceConfig | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> SourceConfig:
        if self._config is None:
            raise FileNotFoundError(f"Config not found at {self.path()}")
        return self._config

    def save(self, config: SourceConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/sourcectl/config.toml")
