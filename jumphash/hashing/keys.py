from __future__ import annotations

from struct import pack
from typing import TYPE_CHECKING, Any

from ormsgpack import OPT_SORT_KEYS, packb

from jumphash.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterator

STR_TERMINATOR = b"\xff"


def _u64(value: int) -> bytes:
    return value.to_bytes(8, "little")


def _encode_int(value: int) -> bytes:
    if -(1 << 63) <= value < (1 << 64):
        return (value & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "little")
    if -(1 << 127) <= value < (1 << 128):
        return (value & ((1 << 128) - 1)).to_bytes(16, "little")
    raise OverflowError("integer keys must fit in 128 bits")


def _encode_str(value: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidArgumentError(f"string key is not valid unicode: {e}") from e


def iter_key_chunks(key: Any) -> Iterator[bytes]:
    if isinstance(key, str):
        yield _encode_str(key)
        yield STR_TERMINATOR
    elif isinstance(key, (bytes, bytearray, memoryview)):
        data = bytes(key)
        yield _u64(len(data))
        yield data
    elif isinstance(key, bool):
        yield b"\x01" if key else b"\x00"
    elif isinstance(key, int):
        yield _encode_int(key)
    elif isinstance(key, float):
        yield pack("<d", key)
    elif key is None:
        return
    elif isinstance(key, tuple):
        for item in key:
            yield from iter_key_chunks(item)
    elif isinstance(key, list):
        yield _u64(len(key))
        for item in key:
            yield from iter_key_chunks(item)
    else:
        # records: map keys must be str so they can be sorted
        data = packb(key, option=OPT_SORT_KEYS)
        yield _u64(len(data))
        yield data


def encode_key(key: Any) -> bytes:
    return b"".join(iter_key_chunks(key))
