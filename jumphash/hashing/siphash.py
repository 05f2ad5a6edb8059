from __future__ import annotations

from struct import unpack_from
from typing import ClassVar

MASK64 = 0xFFFFFFFFFFFFFFFF


def _rotl(x: int, b: int) -> int:
    return ((x << b) | (x >> (64 - b))) & MASK64


def _sip_round(v0: int, v1: int, v2: int, v3: int) -> tuple[int, int, int, int]:
    v0 = (v0 + v1) & MASK64
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & MASK64
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & MASK64
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & MASK64
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


class SipHasher:
    c_rounds: ClassVar[int] = 2
    d_rounds: ClassVar[int] = 4
    name: ClassVar[str] = "siphash24"
    digest_size: ClassVar[int] = 8

    __slots__ = ("_k0", "_k1", "_v0", "_v1", "_v2", "_v3", "_tail", "_length")

    def __init__(self, k0: int = 0, k1: int = 0, data: bytes = b"") -> None:
        if not 0 <= k0 <= MASK64 or not 0 <= k1 <= MASK64:
            raise ValueError("SipHash keys must be unsigned 64-bit integers")
        self._k0 = k0
        self._k1 = k1
        self._v0 = k0 ^ 0x736F6D6570736575
        self._v1 = k1 ^ 0x646F72616E646F6D
        self._v2 = k0 ^ 0x6C7967656E657261
        self._v3 = k1 ^ 0x7465646279746573
        self._tail = b""
        self._length = 0
        if data:
            self.update(data)

    @property
    def keys(self) -> tuple[int, int]:
        return self._k0, self._k1

    def _compress(self, m: int) -> None:
        v0, v1, v2, v3 = self._v0, self._v1, self._v2, self._v3 ^ m
        for _ in range(self.c_rounds):
            v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
        self._v0, self._v1, self._v2, self._v3 = v0 ^ m, v1, v2, v3

    def update(self, data: bytes | bytearray | memoryview) -> None:
        data = bytes(data)
        self._length += len(data)
        buf = self._tail + data
        full = len(buf) - len(buf) % 8
        for offset in range(0, full, 8):
            (m,) = unpack_from("<Q", buf, offset)
            self._compress(m)
        self._tail = buf[full:]

    def intdigest(self) -> int:
        b = ((self._length & 0xFF) << 56) | int.from_bytes(self._tail, "little")
        v0, v1, v2, v3 = self._v0, self._v1, self._v2, self._v3 ^ b
        for _ in range(self.c_rounds):
            v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
        v0 ^= b
        v2 ^= 0xFF
        for _ in range(self.d_rounds):
            v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
        return v0 ^ v1 ^ v2 ^ v3

    def digest(self) -> bytes:
        return self.intdigest().to_bytes(8, "little")

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> SipHasher:
        clone = object.__new__(type(self))
        clone._k0, clone._k1 = self._k0, self._k1
        clone._v0, clone._v1 = self._v0, self._v1
        clone._v2, clone._v3 = self._v2, self._v3
        clone._tail = self._tail
        clone._length = self._length
        return clone

    def __repr__(self) -> str:
        # keys stay out of the repr
        return f"{type(self).__name__}(length={self._length})"


class SipHasher13(SipHasher):
    __slots__ = ()

    c_rounds = 1
    d_rounds = 3
    name = "siphash13"


class SipHasher24(SipHasher):
    __slots__ = ()
