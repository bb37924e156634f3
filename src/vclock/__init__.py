from vclock.clock import UINT64_MAX, Condition, VectorClock
from vclock.codec import FORMAT_VERSION, ClockCodec, decode, encode
from vclock.config import (
    CodecConfig,
    LoggingConfig,
    VClockConfig,
    configure,
    discover_config,
    get_config,
    load_config,
)
from vclock.errors import DecodeError, EncodeError, InvalidEntryError, VectorClockError

__version__ = "0.1.0"

__all__ = [
    "ClockCodec",
    "CodecConfig",
    "Condition",
    "DecodeError",
    "EncodeError",
    "FORMAT_VERSION",
    "InvalidEntryError",
    "LoggingConfig",
    "UINT64_MAX",
    "VClockConfig",
    "VectorClock",
    "VectorClockError",
    "configure",
    "decode",
    "discover_config",
    "encode",
    "get_config",
    "load_config",
]
