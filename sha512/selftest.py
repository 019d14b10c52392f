"""
Known-answer tests for the SHA-384 / SHA-512 engine.

FIPS 180-2 test vectors:
1. "abc"
2. the 112-byte two-block message
3. one million 'a' characters, fed as 1000 updates of 1000 bytes
"""

import logging

from .engine import SHA384, SHA512, SHA512Context

logger = logging.getLogger(__name__)

TWO_BLOCK_MESSAGE = (b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmn"
                     b"hijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu")

TEST_MESSAGES = (
    b"abc",
    TWO_BLOCK_MESSAGE,
    b"a" * 1000,
)

# the third message is fed this many times
MILLION_A_REPEATS = 1000

TEST_DIGESTS = (
    # SHA-384
    (SHA384, bytes.fromhex(
        "cb00753f45a35e8bb5a03d699ac65007272c32ab0eded163"
        "1a8b605a43ff5bed8086072ba1e7cc2358baeca134c825a7")),
    (SHA384, bytes.fromhex(
        "09330c33f71147e83d192fc782cd1b4753111b173b3b05d2"
        "2fa08086e3b0f712fcc7c71a557e2db966c3e9fa91746039")),
    (SHA384, bytes.fromhex(
        "9d0e1809716474cb086e834e310a4a1ced149e9c00f24852"
        "7972cec5704c2a5b07b8b3dc38ecc4ebae97ddd87f3d8985")),
    # SHA-512
    (SHA512, bytes.fromhex(
        "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
        "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f")),
    (SHA512, bytes.fromhex(
        "8e959b75dae313da8cf4f72814fc143f8f7779c6eb9f7fa17299aeadb6889018"
        "501d289e4900f7e4331b99dec4b5433ac7d329eeb6dd26545e96e55b874be909")),
    (SHA512, bytes.fromhex(
        "e718483d0ce769644e2e42c7bc15b4638e1f98b13b2044285632a803afa973eb"
        "de0ff244877ea60a4cb0432ce577c31beb009c5c2c49aa2e4eadb217ad8cc09b")),
)


class SelfTestError(AssertionError):
    """A known-answer test produced the wrong digest."""


def self_test(verbose: bool = False) -> bool:
    for i, (digest_bits, expected) in enumerate(TEST_DIGESTS):
        j = i % len(TEST_MESSAGES)
        ctx = SHA512Context(digest_bits)
        buf = TEST_MESSAGES[j]
        if j == 2:
            for _ in range(MILLION_A_REPEATS):
                ctx.update(buf)
        else:
            ctx.update(buf)

        result = ctx.finish()
        if result != expected:
            logger.debug(f"SHA-{digest_bits} test {j + 1}: expected {expected.hex()}, got {result.hex()}")
            if verbose:
                logger.info(f"SHA-{digest_bits} test {j + 1}: failed")
            return False

        if verbose:
            logger.info(f"SHA-{digest_bits} test {j + 1}: passed")

    return True


def run_self_test(verbose: bool = False):
    if not self_test(verbose):
        logger.error("SHA-384/512 self test failed")
        raise SelfTestError("Self test failed")
