from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from xxhash import xxh64

from jumphash.errors import InvalidArgumentError
from jumphash.hashing.siphash import MASK64, SipHasher13, SipHasher24

if TYPE_CHECKING:
    from collections.abc import Callable


@runtime_checkable
class HashAlgorithm(Protocol):
    # digest comes from intdigest() if present, else the first 8 bytes of digest()
    def update(self, data: bytes, /) -> None: ...

    def copy(self) -> HashAlgorithm: ...


def check_algorithm(algorithm: object) -> HashAlgorithm:
    if not isinstance(algorithm, HashAlgorithm):
        raise TypeError(
            f"{type(algorithm).__name__} does not provide update() and copy()"
        )
    if not (hasattr(algorithm, "intdigest") or hasattr(algorithm, "digest")):
        raise TypeError(
            f"{type(algorithm).__name__} provides neither intdigest() nor digest()"
        )
    return algorithm


def digest64(state: HashAlgorithm) -> int:
    intdigest = getattr(state, "intdigest", None)
    if intdigest is not None:
        return intdigest() & MASK64
    raw: bytes = state.digest()  # type: ignore[attr-defined]
    if len(raw) < 8:
        raise ValueError(f"digest is {len(raw)} bytes, at least 8 are required")
    return int.from_bytes(raw[:8], "little")


def _xxh64(k1: int, k2: int) -> HashAlgorithm:
    return xxh64(seed=k1 ^ k2)


ALGORITHMS: dict[str, Callable[[int, int], HashAlgorithm]] = {
    "siphash13": SipHasher13,
    "siphash24": SipHasher24,
    "xxh64": _xxh64,
}
DEFAULT_ALGORITHM = "siphash13"


def build_algorithm(name: str, k1: int, k2: int) -> HashAlgorithm:
    factory = ALGORITHMS.get(name.lower())
    if factory is None:
        raise InvalidArgumentError(
            f"Unknown hash algorithm: {name} (expected one of {sorted(ALGORITHMS)})"
        )
    return factory(k1, k2)
