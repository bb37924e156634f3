"""Configuração: limites do codec e logging via vclock.toml."""

from pathlib import Path
from tempfile import TemporaryDirectory

from vclock import DecodeError, VectorClock, configure, decode, load_config

with TemporaryDirectory() as tmp:
    path = Path(tmp) / "vclock.toml"
    path.write_text(
        "[codec]\n"
        "max_entries = 2\n"
        "\n"
        "[logging]\n"
        'level = "debug"\n'
        "location = true\n"
    )
    configure(load_config(path))

data = VectorClock({"a": 1, "b": 1, "c": 1}).to_bytes()

try:
    decode(data)
except DecodeError as exc:
    print(f"rejected: {exc}")
