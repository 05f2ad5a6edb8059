from jumphash.errors import (
    InvalidArgumentError,
    JumpHashError,
    RandomSourceUnavailableError,
)
from jumphash.hashing import (
    HashAlgorithm,
    SipHasher13,
    SipHasher24,
    build_algorithm,
    encode_key,
)
from jumphash.jump import JumpHasher, jump_consistent_hash

__all__ = [
    "HashAlgorithm",
    "InvalidArgumentError",
    "JumpHashError",
    "JumpHasher",
    "RandomSourceUnavailableError",
    "SipHasher13",
    "SipHasher24",
    "build_algorithm",
    "encode_key",
    "jump_consistent_hash",
]
