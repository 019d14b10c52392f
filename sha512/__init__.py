"""
Pure-Python SHA-512 / SHA-384 (FIPS 180-4) streaming hash engine.

Main classes:
    SHA512Context: incremental hash context (update / finish)

Example usage:
    from sha512 import SHA512Context, SHA384

    ctx = SHA512Context(SHA384)
    ctx.update(b"ab")
    ctx.update(b"c")
    digest = ctx.finish()  # 48 bytes
"""

from .engine import (
    BLOCK_SIZE,
    SHA384,
    SHA512,
    ContextFinishedError,
    SHA512Context,
    compress,
    create,
    pad,
    sha384,
    sha512,
)
from .selftest import SelfTestError, run_self_test, self_test

__all__ = [
    'BLOCK_SIZE',
    'SHA384',
    'SHA512',
    'ContextFinishedError',
    'SHA512Context',
    'SelfTestError',
    'compress',
    'create',
    'pad',
    'run_self_test',
    'self_test',
    'sha384',
    'sha512',
]
__version__ = '1.0.0'
