from jumphash.hashing.algorithms import (
    ALGORITHMS,
    DEFAULT_ALGORITHM,
    HashAlgorithm,
    build_algorithm,
    check_algorithm,
    digest64,
)
from jumphash.hashing.keys import encode_key, iter_key_chunks
from jumphash.hashing.siphash import SipHasher, SipHasher13, SipHasher24

__all__ = [
    "ALGORITHMS",
    "DEFAULT_ALGORITHM",
    "HashAlgorithm",
    "SipHasher",
    "SipHasher13",
    "SipHasher24",
    "build_algorithm",
    "check_algorithm",
    "digest64",
    "encode_key",
    "iter_key_chunks",
]
