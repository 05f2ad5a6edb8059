from __future__ import annotations


class JumpHashError(Exception):
    pass


class InvalidArgumentError(JumpHashError, ValueError):
    pass


class RandomSourceUnavailableError(JumpHashError, RuntimeError):
    pass
