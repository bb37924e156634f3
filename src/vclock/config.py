"""TOML-based configuration for vclock.

Provides ``load_config`` / ``discover_config`` for loading ``vclock.toml``,
the frozen dataclasses describing codec limits and logging, and
``configure`` to make a configuration the active one.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, get_args

from vclock import logger

__all__ = [
    "CodecConfig",
    "LevelName",
    "LoggingConfig",
    "VClockConfig",
    "configure",
    "discover_config",
    "get_config",
    "load_config",
]


type LevelName = Literal["debug", "info", "warn", "error", "off"]

CONFIG_FILENAME = "vclock.toml"


@dataclass(frozen=True)
class CodecConfig:
    """Limits enforced when decoding clocks received from the outside.

    Parameters
    ----------
    max_payload_size : int
        Largest accepted encoded clock, in bytes.
    max_entries : int
        Largest accepted number of process ids in a decoded clock.

    Examples
    --------
    >>> CodecConfig(max_payload_size=4096)
    CodecConfig(max_payload_size=4096, max_entries=65536)
    """

    max_payload_size: int = 64 * 1024
    max_entries: int = 64 * 1024

    def __post_init__(self) -> None:
        if self.max_payload_size < 1:
            msg = f"max_payload_size must be positive, got {self.max_payload_size}"
            raise ValueError(msg)
        if self.max_entries < 0:
            msg = f"max_entries must not be negative, got {self.max_entries}"
            raise ValueError(msg)


@dataclass(frozen=True)
class LoggingConfig:
    """Settings for the ``vclock`` logger.

    Parameters
    ----------
    level : LevelName
        Minimum level emitted: ``"debug"``, ``"info"``, ``"warn"``,
        ``"error"`` or ``"off"``.
    location : bool
        Prefix each message with ``logger:function:line`` of the call site.
    """

    level: LevelName = "warn"
    location: bool = False

    def __post_init__(self) -> None:
        if self.level not in get_args(LevelName.__value__):
            msg = f"Unknown log level: {self.level!r}"
            raise ValueError(msg)


@dataclass(frozen=True)
class VClockConfig:
    codec: CodecConfig = field(default_factory=CodecConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_active: VClockConfig = VClockConfig()


def get_config() -> VClockConfig:
    return _active


def configure(config: VClockConfig | None = None) -> VClockConfig:
    """Make *config* the active configuration and apply its logging settings.

    With no argument the configuration is loaded through ``load_config``,
    which falls back to defaults when no ``vclock.toml`` is found.
    """
    global _active
    if config is None:
        config = load_config()
    _active = config
    logger.apply(config.logging)
    return config


def discover_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``vclock.toml``.

    Parameters
    ----------
    start : Path | None
        Directory to start searching from.

    Returns
    -------
    Path | None
        Path to the discovered config file, or ``None`` if not found.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(path: Path | None = None) -> VClockConfig:
    """Load a ``VClockConfig`` from a TOML file.

    If *path* is ``None``, auto-discovers ``vclock.toml`` by walking up from
    the current working directory. Returns the default config if no file is
    found.

    Raises
    ------
    FileNotFoundError
        If an explicit *path* is given but does not exist.
    TypeError
        If a table contains an unknown key.
    ValueError
        If a setting has an invalid value.

    Examples
    --------
    >>> config = load_config(Path("vclock.toml"))
    >>> config.codec.max_payload_size
    65536
    """
    if path is None:
        discovered = discover_config()
        if discovered is None:
            return VClockConfig()
        path = discovered

    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as f:
        raw = tomllib.load(f)

    config = VClockConfig(
        codec=CodecConfig(**raw.get("codec", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )
    logger.info("Loaded configuration", path=str(path))
    return config
