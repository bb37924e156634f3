from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vclock import (
    CodecConfig,
    LoggingConfig,
    VClockConfig,
    configure,
    discover_config,
    get_config,
    load_config,
)


# ---------------------------------------------------------------------------
# Config dataclass defaults
# ---------------------------------------------------------------------------


class TestCodecConfig:
    def test_defaults(self) -> None:
        cfg = CodecConfig()
        assert cfg.max_payload_size == 65536
        assert cfg.max_entries == 65536

    def test_frozen(self) -> None:
        cfg = CodecConfig()
        with pytest.raises(AttributeError):
            cfg.max_entries = 1  # type: ignore[misc]

    def test_rejects_non_positive_payload_size(self) -> None:
        with pytest.raises(ValueError, match="max_payload_size"):
            CodecConfig(max_payload_size=0)

    def test_rejects_negative_entries(self) -> None:
        with pytest.raises(ValueError, match="max_entries"):
            CodecConfig(max_entries=-1)


class TestLoggingConfig:
    def test_defaults(self) -> None:
        cfg = LoggingConfig()
        assert cfg.level == "warn"
        assert cfg.location is False

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="log level"):
            LoggingConfig(level="verbose")  # type: ignore[arg-type]


class TestVClockConfigDefaults:
    def test_all_defaults(self) -> None:
        cfg = VClockConfig()
        assert cfg.codec == CodecConfig()
        assert cfg.logging == LoggingConfig()


# ---------------------------------------------------------------------------
# discover_config / load_config
# ---------------------------------------------------------------------------


class TestDiscoverConfig:
    def test_finds_file_in_start_dir(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "vclock.toml"
        toml_file.write_text("")
        assert discover_config(tmp_path) == toml_file.resolve()

    def test_walks_up_to_parent(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "vclock.toml"
        toml_file.write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert discover_config(nested) == toml_file.resolve()

    def test_none_when_missing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Path, "is_file", lambda self: False)
        assert discover_config(tmp_path) is None


class TestLoadConfig:
    def test_full_config(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "vclock.toml"
        toml_file.write_text(
            "[codec]\n"
            "max_payload_size = 1024\n"
            "max_entries = 16\n"
            "\n"
            "[logging]\n"
            'level = "debug"\n'
            "location = true\n"
        )
        cfg = load_config(toml_file)
        assert cfg.codec == CodecConfig(max_payload_size=1024, max_entries=16)
        assert cfg.logging == LoggingConfig(level="debug", location=True)

    def test_minimal_config(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "vclock.toml"
        toml_file.write_text("")
        assert load_config(toml_file) == VClockConfig()

    def test_partial_table(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "vclock.toml"
        toml_file.write_text("[codec]\nmax_entries = 8\n")
        cfg = load_config(toml_file)
        assert cfg.codec.max_entries == 8
        assert cfg.codec.max_payload_size == 65536
        assert cfg.logging == LoggingConfig()

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_unknown_key(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "vclock.toml"
        toml_file.write_text("[codec]\nmax_clocks = 3\n")
        with pytest.raises(TypeError):
            load_config(toml_file)

    def test_invalid_value(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "vclock.toml"
        toml_file.write_text('[logging]\nlevel = "loud"\n')
        with pytest.raises(ValueError):
            load_config(toml_file)

    def test_discovers_from_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "vclock.toml").write_text("[codec]\nmax_entries = 5\n")
        nested = tmp_path / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        assert load_config().codec.max_entries == 5

    def test_defaults_when_nothing_found(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("vclock.config.discover_config", lambda start=None: None)
        assert load_config() == VClockConfig()


# ---------------------------------------------------------------------------
# configure / get_config
# ---------------------------------------------------------------------------


class TestConfigure:
    def test_sets_active_config(self) -> None:
        cfg = VClockConfig(codec=CodecConfig(max_entries=3))
        assert configure(cfg) is cfg
        assert get_config() is cfg

    def test_applies_log_level(self) -> None:
        configure(VClockConfig(logging=LoggingConfig(level="debug")))
        assert logging.getLogger("vclock").level == logging.DEBUG

        configure(VClockConfig(logging=LoggingConfig(level="off")))
        assert logging.getLogger("vclock").level > logging.CRITICAL

    def test_loads_when_called_without_argument(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "vclock.toml").write_text('[logging]\nlevel = "error"\n')
        monkeypatch.chdir(tmp_path)
        cfg = configure()
        assert cfg.logging.level == "error"
        assert get_config() is cfg
        assert logging.getLogger("vclock").level == logging.ERROR
