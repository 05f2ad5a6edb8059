from __future__ import annotations

from dataclasses import dataclass
from os import getenv

from jumphash.errors import InvalidArgumentError
from jumphash.hashing.algorithms import DEFAULT_ALGORITHM


def _parse_key(name: str, raw: str) -> int:
    try:
        return int(raw, 0)
    except ValueError as e:
        raise InvalidArgumentError(f"{name} is not an integer: {raw!r}") from e


@dataclass(frozen=True, slots=True)
class HasherConfig:
    k1: int | None = None
    k2: int | None = None
    algorithm: str = DEFAULT_ALGORITHM
    slot_count: int = 1

    @property
    def deterministic(self) -> bool:
        return self.k1 is not None and self.k2 is not None


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    request_timeout: float = 5.0


@dataclass(slots=True)
class Config:
    hasher: HasherConfig
    service: ServiceConfig
    metrics_port: int = 9090
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Config:
        raw_k1 = getenv("JUMPHASH_K1")
        raw_k2 = getenv("JUMPHASH_K2")
        if (raw_k1 is None) != (raw_k2 is None):
            raise InvalidArgumentError(
                "JUMPHASH_K1 and JUMPHASH_K2 must be set together"
            )

        hasher = HasherConfig(
            k1=_parse_key("JUMPHASH_K1", raw_k1) if raw_k1 is not None else None,
            k2=_parse_key("JUMPHASH_K2", raw_k2) if raw_k2 is not None else None,
            algorithm=getenv("JUMPHASH_ALGORITHM", DEFAULT_ALGORITHM),
            slot_count=int(getenv("JUMPHASH_SLOT_COUNT", "1")),
        )

        service = ServiceConfig(
            host=getenv("SERVICE_HOST", "0.0.0.0"),
            port=int(getenv("SERVICE_PORT", "8000")),
            request_timeout=float(getenv("REQUEST_TIMEOUT", "5.0")),
        )

        return cls(
            hasher=hasher,
            service=service,
            metrics_port=int(getenv("METRICS_PORT", "9090")),
            log_level=getenv("LOG_LEVEL", "INFO"),
        )
