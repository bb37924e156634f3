"""
Binary codec for vector clocks.

Wire format:
    [format version: 1 byte][payload: msgpack map, str -> uint]

Entries are packed in ascending id order, so equal clocks always encode to
the same bytes.
"""

from __future__ import annotations

from typing import Any

import msgpack

from vclock import logger
from vclock.clock import UINT64_MAX, VectorClock
from vclock.config import CodecConfig, get_config
from vclock.errors import DecodeError, EncodeError

__all__ = [
    "FORMAT_VERSION",
    "ClockCodec",
    "decode",
    "encode",
]

FORMAT_VERSION = 1
HEADER_SIZE = 1


def _fail(reason: str, data: bytes) -> DecodeError:
    logger.debug("Vector clock decode failed", reason=reason, size=len(data))
    return DecodeError(reason)


def _build_clock(payload: Any, data: bytes) -> VectorClock:
    if not isinstance(payload, dict):
        raise _fail(f"Payload is not a map: {type(payload).__name__}", data)

    clock = VectorClock()
    for node_id, ticks in payload.items():
        if not isinstance(node_id, str) or not node_id:
            raise _fail(f"Invalid process id: {node_id!r}", data)
        if isinstance(ticks, bool) or not isinstance(ticks, int):
            raise _fail(f"Counter for {node_id!r} is not an integer", data)
        if not 0 <= ticks <= UINT64_MAX:
            raise _fail(f"Counter for {node_id!r} out of uint64 range", data)
        clock.set(node_id, ticks)
    return clock


class ClockCodec:
    """Encoder/decoder bound to a fixed ``CodecConfig``.

    Example:
        codec = ClockCodec(CodecConfig(max_entries=128))
        data = codec.encode(clock)
        same = codec.decode(data)
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()

    @property
    def config(self) -> CodecConfig:
        return self._config

    def encode(self, clock: VectorClock) -> bytes:
        """Encode *clock* with its version header.

        Raises:
            EncodeError: If the clock holds entries outside its data model.
        """
        entries = clock.to_dict()
        ordered = {node_id: entries[node_id] for node_id in sorted(entries)}
        try:
            payload = msgpack.packb(ordered, use_bin_type=True)
        except (TypeError, ValueError, OverflowError) as exc:
            logger.error("Vector clock encode failed", error=str(exc), entries=len(entries))
            msg = f"Cannot encode vector clock: {exc}"
            raise EncodeError(msg) from exc
        return bytes([FORMAT_VERSION]) + payload

    def decode(self, data: bytes | bytearray | memoryview) -> VectorClock:
        """Decode one clock occupying all of *data*.

        Raises:
            DecodeError: If *data* is empty, too large, has an unknown
                version, is not valid msgpack, has trailing bytes or does
                not describe a clock.
        """
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise _fail("Empty input", data)
        if len(data) > self._config.max_payload_size:
            raise _fail(
                f"Payload too large: {len(data)} > {self._config.max_payload_size}",
                data,
            )
        if data[0] != FORMAT_VERSION:
            raise _fail(f"Unknown format version: {data[0]}", data)

        try:
            payload = msgpack.unpackb(
                data[HEADER_SIZE:],
                raw=False,
                strict_map_key=True,
                max_map_len=self._config.max_entries,
            )
        except (ValueError, msgpack.UnpackException) as exc:
            err = _fail(f"Malformed payload: {exc}", data)
            raise err from exc

        return _build_clock(payload, data)


def encode(clock: VectorClock) -> bytes:
    return ClockCodec(get_config().codec).encode(clock)


def decode(
    data: bytes | bytearray | memoryview, *, config: CodecConfig | None = None
) -> VectorClock:
    """Decode *data* with *config*, or the active codec config when omitted."""
    return ClockCodec(config or get_config().codec).decode(data)
