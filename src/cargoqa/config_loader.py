# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import logging
import os
import re
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final

from .config import Config, ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_INCLUDE_KEY: Final[str] = "include"
DEFAULT_CONFIG_FILENAME: Final[str] = ".cargo-qa.toml"
CARGO_MANIFEST: Final[str] = "Cargo.toml"
METADATA_KEY: Final[str] = "metadata"
METADATA_SECTION_KEY: Final[str] = "cargo-qa"
_ENV_VAR_PATTERN = re.compile(r"\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))")
# Suppression markers match literal source text such as `$crate::`.
_VERBATIM_KEYS: Final[frozenset[str]] = frozenset({"marker"})


class ConfigSource(ABC):
    """Source of a raw configuration fragment."""

    name: str

    @abstractmethod
    def load(self) -> Mapping[str, Any]:
        """Return the configuration fragment provided by this source."""

    @abstractmethod
    def describe(self) -> str:
        """Return a human readable description of the source."""


class DefaultConfigSource(ConfigSource):
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return Config().to_dict()

    def describe(self) -> str:
        return "Built-in defaults"


class TomlConfigSource(ConfigSource):
    """Load configuration data from a TOML document with include support."""

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        include_key: str = DEFAULT_INCLUDE_KEY,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._root_path = path
        self.name = name or str(path)
        self._include_key = include_key
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        return self._load(self._root_path, ())

    def _load(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        if not path.exists():
            return {}
        resolved = path.resolve()
        if resolved in stack:
            include_chain = " -> ".join(str(entry) for entry in (*stack, resolved))
            raise ConfigError(f"Circular include detected: {include_chain}")
        data = _read_toml(resolved)
        # Only the root document is narrowed by select(); includes are plain fragments.
        document = _normalise_keys(data if stack else self.select(data))
        includes = document.pop(self._include_key, None)
        merged: dict[str, Any] = {}
        for include_path in self._coerce_includes(includes, resolved.parent):
            LOGGER.debug("including configuration from %s", include_path)
            fragment = self._load(include_path, stack + (resolved,))
            merged = deep_merge(merged, fragment)
        merged = deep_merge(merged, document)
        return expand_env(merged, self._env)

    def select(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        """Return the portion of a parsed document that holds configuration."""

        return data

    def _coerce_includes(self, raw: Any, base_dir: Path) -> Iterable[Path]:
        if raw is None:
            return []
        if isinstance(raw, str):
            return [self._resolve_path(Path(raw), base_dir)]
        if isinstance(raw, Sequence):
            return [self._resolve_path(Path(str(item)), base_dir) for item in raw]
        raise ConfigError(f"Unsupported include declaration: {raw!r}")

    @staticmethod
    def _resolve_path(path: Path, base_dir: Path) -> Path:
        return path if path.is_absolute() else (base_dir / path)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class CargoManifestConfigSource(TomlConfigSource):
    """Read configuration from ``[package.metadata.cargo-qa]`` in ``Cargo.toml``.

    Workspace manifests may use ``[workspace.metadata.cargo-qa]`` instead; the
    package table wins when both are present.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path, name=str(path))

    def select(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        for table in ("package", "workspace"):
            section = data.get(table)
            if not isinstance(section, Mapping):
                continue
            metadata = section.get(METADATA_KEY)
            if isinstance(metadata, Mapping) and isinstance(metadata.get(METADATA_SECTION_KEY), Mapping):
                return metadata[METADATA_SECTION_KEY]
        return {}

    def describe(self) -> str:
        return f"Cargo.toml ({self.name})"


class ConfigLoader:
    """Merge configuration sources in order of increasing precedence."""

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        self._sources = tuple(sources)

    @classmethod
    def for_root(cls, root: Path, config_file: Path | None = None) -> ConfigLoader:
        """Return a loader for ``root`` honouring an explicit ``config_file``.

        Args:
            root: Project directory that holds ``Cargo.toml``.
            config_file: Optional explicit TOML file; defaults to
                ``.cargo-qa.toml`` inside ``root`` when present.

        Returns:
            ConfigLoader: Loader with defaults, manifest metadata and file sources.

        Raises:
            ConfigError: If an explicit ``config_file`` does not exist.
        """

        sources: list[ConfigSource] = [DefaultConfigSource(), CargoManifestConfigSource(root / CARGO_MANIFEST)]
        if config_file is not None:
            if not config_file.is_file():
                raise ConfigError(f"Configuration file not found: {config_file}")
            sources.append(TomlConfigSource(config_file))
        else:
            sources.append(TomlConfigSource(root / DEFAULT_CONFIG_FILENAME))
        return cls(sources)

    def load(self) -> Config:
        """Return the merged, validated configuration."""

        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if fragment:
                LOGGER.debug("applying configuration from %s", source.describe())
            merged = deep_merge(merged, fragment)
        return Config.from_mapping(merged)


def load_config(root: Path, config_file: Path | None = None) -> Config:
    """Load configuration for the project rooted at ``root``."""

    return ConfigLoader.for_root(root, config_file).load()


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``override``; nested tables merge, lists replace."""

    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Expand ``$VAR``/``${VAR}`` references in string values other than suppression markers."""

    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: env.get(match.group(1) or match.group(2), match.group(0)), value)
    if isinstance(value, Mapping):
        return {k: v if k in _VERBATIM_KEYS else _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    # TOML convention is kebab-case; model fields are snake_case.
    normalised: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            value = _normalise_keys(value)
        elif isinstance(value, list):
            value = [_normalise_keys(item) if isinstance(item, Mapping) else item for item in value]
        normalised[str(key).replace("-", "_")] = value
    return normalised


def _read_toml(path: Path) -> MutableMapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


__all__ = [
    "CargoManifestConfigSource",
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "TomlConfigSource",
    "deep_merge",
    "expand_env",
    "load_config",
]
