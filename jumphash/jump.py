from __future__ import annotations

from dataclasses import dataclass, field
from secrets import randbits
from typing import TYPE_CHECKING, Any

from loguru import logger

from jumphash.errors import InvalidArgumentError, RandomSourceUnavailableError
from jumphash.hashing.algorithms import (
    DEFAULT_ALGORITHM,
    build_algorithm,
    check_algorithm,
    digest64,
)
from jumphash.hashing.keys import iter_key_chunks
from jumphash.hashing.siphash import MASK64

if TYPE_CHECKING:
    from jumphash.hashing.algorithms import HashAlgorithm
    from jumphash.utils.config import HasherConfig

MAX_SLOT_COUNT = 0xFFFFFFFF
LCG_MULTIPLIER = 2862933555777941757
_JUMP_SCALE = float(1 << 31)


def check_slot_count(slot_count: int) -> None:
    if not isinstance(slot_count, int) or isinstance(slot_count, bool):
        raise TypeError(f"slot_count must be an int, got {type(slot_count).__name__}")
    if slot_count < 1:
        raise InvalidArgumentError(f"slot_count must be >= 1, got {slot_count}")
    if slot_count > MAX_SLOT_COUNT:
        raise InvalidArgumentError(
            f"slot_count must fit in 32 bits, got {slot_count}"
        )


def _check_u64(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= MASK64:
        raise InvalidArgumentError(f"{name} must be an unsigned 64-bit integer")
    return value


def _jump(digest: int, slot_count: int) -> int:
    # double-precision division truncated toward zero, bit-exact with other ports
    h = digest & MASK64
    b, j = -1, 0
    while j < slot_count:
        b = j
        h = (h * LCG_MULTIPLIER + 1) & MASK64
        j = int(float(b + 1) * (_JUMP_SCALE / float((h >> 33) + 1)))
    return b


def jump_consistent_hash(digest: int, slot_count: int) -> int:
    check_slot_count(slot_count)
    return _jump(digest, slot_count)


def random_keys() -> tuple[int, int]:
    try:
        return randbits(64), randbits(64)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceUnavailableError(
            f"Cannot read from the system random source: {e}"
        ) from e


def _random_state() -> HashAlgorithm:
    k1, k2 = random_keys()
    logger.debug("JumpHasher created with a random secret")
    return build_algorithm(DEFAULT_ALGORITHM, k1, k2)


@dataclass(frozen=True, slots=True)
class JumpHasher:
    _state: HashAlgorithm = field(default_factory=_random_state, repr=False)

    @classmethod
    def new(cls) -> JumpHasher:
        return cls()

    @classmethod
    def with_keys(
        cls,
        k1: int,
        k2: int,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> JumpHasher:
        _check_u64("k1", k1)
        _check_u64("k2", k2)
        return cls(build_algorithm(algorithm, k1, k2))

    @classmethod
    def from_config(cls, config: HasherConfig) -> JumpHasher:
        if config.k1 is None or config.k2 is None:
            k1, k2 = random_keys()
            logger.debug(f"JumpHasher created with a random {config.algorithm} secret")
        else:
            k1, k2 = config.k1, config.k2
        return cls.with_keys(k1, k2, config.algorithm)

    @classmethod
    def custom(cls, algorithm: HashAlgorithm) -> JumpHasher:
        state = check_algorithm(algorithm).copy()
        logger.debug(f"JumpHasher created with {type(algorithm).__name__}")
        return cls(state)

    @property
    def algorithm_name(self) -> str:
        return getattr(self._state, "name", type(self._state).__name__)

    def digest(self, key: Any) -> int:
        state = self._state.copy()
        for chunk in iter_key_chunks(key):
            state.update(chunk)
        return digest64(state)

    def slot(self, key: Any, slot_count: int) -> int:
        check_slot_count(slot_count)
        return _jump(self.digest(key), slot_count)

    def __repr__(self) -> str:
        return f"JumpHasher(algorithm={self.algorithm_name!r})"
