import copy
import logging
from struct import pack, unpack
from typing import List, Sequence, Union

logger = logging.getLogger(__name__)

SHA384 = 384
SHA512 = 512

BLOCK_SIZE = 128
LENGTH_FIELD_SIZE = 16
WORD_MASK = 0xFFFFFFFFFFFFFFFF
LENGTH_MASK = (1 << 128) - 1

K = (
    0x428a2f98d728ae22, 0x7137449123ef65cd, 0xb5c0fbcfec4d3b2f, 0xe9b5dba58189dbbc,
    0x3956c25bf348b538, 0x59f111f1b605d019, 0x923f82a4af194f9b, 0xab1c5ed5da6d8118,
    0xd807aa98a3030242, 0x12835b0145706fbe, 0x243185be4ee4b28c, 0x550c7dc3d5ffb4e2,
    0x72be5d74f27b896f, 0x80deb1fe3b1696b1, 0x9bdc06a725c71235, 0xc19bf174cf692694,
    0xe49b69c19ef14ad2, 0xefbe4786384f25e3, 0x0fc19dc68b8cd5b5, 0x240ca1cc77ac9c65,
    0x2de92c6f592b0275, 0x4a7484aa6ea6e483, 0x5cb0a9dcbd41fbd4, 0x76f988da831153b5,
    0x983e5152ee66dfab, 0xa831c66d2db43210, 0xb00327c898fb213f, 0xbf597fc7beef0ee4,
    0xc6e00bf33da88fc2, 0xd5a79147930aa725, 0x06ca6351e003826f, 0x142929670a0e6e70,
    0x27b70a8546d22ffc, 0x2e1b21385c26c926, 0x4d2c6dfc5ac42aed, 0x53380d139d95b3df,
    0x650a73548baf63de, 0x766a0abb3c77b2a8, 0x81c2c92e47edaee6, 0x92722c851482353b,
    0xa2bfe8a14cf10364, 0xa81a664bbc423001, 0xc24b8b70d0f89791, 0xc76c51a30654be30,
    0xd192e819d6ef5218, 0xd69906245565a910, 0xf40e35855771202a, 0x106aa07032bbd1b8,
    0x19a4c116b8d2d0c8, 0x1e376c085141ab53, 0x2748774cdf8eeb99, 0x34b0bcb5e19b48a8,
    0x391c0cb3c5c95a63, 0x4ed8aa4ae3418acb, 0x5b9cca4f7763e373, 0x682e6ff3d6b2b8a3,
    0x748f82ee5defb2fc, 0x78a5636f43172f60, 0x84c87814a1f0ab72, 0x8cc702081a6439ec,
    0x90befffa23631e28, 0xa4506cebde82bde9, 0xbef9a3f7b2c67915, 0xc67178f2e372532b,
    0xca273eceea26619c, 0xd186b8c721c0c207, 0xeada7dd6cde0eb1e, 0xf57d4f7fee6ed178,
    0x06f067aa72176fba, 0x0a637dc5a2c898a6, 0x113f9804bef90dae, 0x1b710b35131c471b,
    0x28db77f523047d84, 0x32caab7b40c72493, 0x3c9ebe0a15c9bebc, 0x431d67c49c100d4c,
    0x4cc5d4becb3e42b6, 0x597f299cfc657e2a, 0x5fcb6fab3ad6faec, 0x6c44198c4a475817,
)

IV_512 = (
    0x6a09e667f3bcc908, 0xbb67ae8584caa73b, 0x3c6ef372fe94f82b, 0xa54ff53a5f1d36f1,
    0x510e527fade682d1, 0x9b05688c2b3e6c1f, 0x1f83d9abfb41bd6b, 0x5be0cd19137e2179,
)

IV_384 = (
    0xcbbb9d5dc1059ed8, 0x629a292a367cd507, 0x9159015a3070dd17, 0x152fecd8f70e5939,
    0x67332667ffc00b31, 0x8eb44a8768581511, 0xdb0c2e0d64f98fa7, 0x47b5481dbefa4fa4,
)

# digest_bits -> (initial registers, digest size in bytes)
MODES = {
    SHA384: (IV_384, 48),
    SHA512: (IV_512, 64),
}


class ContextFinishedError(RuntimeError):
    """Raised when data is fed to a context that has already been finished."""


def _rotr64(x: int, n: int) -> int:
    return ((x >> n) | (x << (64 - n))) & WORD_MASK


def compress(state: Sequence[int], block: bytes) -> List[int]:
    """
    SHA-512 compression function (FIPS 180-4, section 6.4.2).

    Args:
        state: eight 64-bit registers
        block: one 128-byte message block

    Returns:
        The eight updated registers. The input sequence is left untouched.
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")

    w = list(unpack('>16Q', block))
    for t in range(16, 80):
        s0 = _rotr64(w[t - 15], 1) ^ _rotr64(w[t - 15], 8) ^ (w[t - 15] >> 7)
        s1 = _rotr64(w[t - 2], 19) ^ _rotr64(w[t - 2], 61) ^ (w[t - 2] >> 6)
        w.append((w[t - 16] + s0 + w[t - 7] + s1) & WORD_MASK)

    a, b, c, d, e, f, g, h = state
    for t in range(80):
        big_s1 = _rotr64(e, 14) ^ _rotr64(e, 18) ^ _rotr64(e, 41)
        ch = (e & f) ^ (~e & g)
        temp1 = (h + big_s1 + ch + K[t] + w[t]) & WORD_MASK
        big_s0 = _rotr64(a, 28) ^ _rotr64(a, 34) ^ _rotr64(a, 39)
        maj = (a & b) ^ (a & c) ^ (b & c)
        temp2 = (big_s0 + maj) & WORD_MASK
        h = g
        g = f
        f = e
        e = (d + temp1) & WORD_MASK
        d = c
        c = b
        b = a
        a = (temp1 + temp2) & WORD_MASK

    return [(x + y) & WORD_MASK for x, y in zip(state, (a, b, c, d, e, f, g, h))]


def pad(tail: bytes, bit_length: int) -> bytes:
    """Append 0x80, zero fill to 112 mod 128 and the 128-bit big-endian bit length."""
    if len(tail) >= BLOCK_SIZE:
        raise ValueError(f"tail must be shorter than {BLOCK_SIZE} bytes, got {len(tail)}")
    padded = bytes(tail) + b'\x80'
    pad_len = (BLOCK_SIZE - LENGTH_FIELD_SIZE - len(padded)) % BLOCK_SIZE
    padded += b'\x00' * pad_len
    padded += (bit_length & LENGTH_MASK).to_bytes(LENGTH_FIELD_SIZE, 'big')
    return padded


class SHA512Context:
    """
    Incremental SHA-512 / SHA-384 context.

    Interface: SHA512Context(digest_bits=512).update(data); finish() / digest() / hexdigest()

    finish() consumes the context: further update() calls raise
    ContextFinishedError, repeated finish() calls return the same digest.
    digest() works on a copy and leaves the context open.
    """
    block_size = BLOCK_SIZE

    def __init__(self, digest_bits: int = SHA512, data: bytes = b""):
        if digest_bits not in MODES:
            raise ValueError("digest_bits must be 384 or 512")
        self._digest_bits = digest_bits
        iv, self._digest_size = MODES[digest_bits]
        self._h = list(iv)
        self._unprocessed = b''
        self._message_byte_length = 0
        self._result = None
        logger.debug(f"Created {self.name} context")

        if data:
            self.update(data)

    @property
    def digest_bits(self) -> int:
        return self._digest_bits

    @property
    def digest_size(self) -> int:
        return self._digest_size

    @property
    def name(self) -> str:
        return f"sha{self._digest_bits}"

    @property
    def finished(self) -> bool:
        return self._result is not None

    def update(self, data: Union[bytes, bytearray, memoryview]):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"data must be bytes-like, not {type(data).__name__}")
        if self.finished:
            raise ContextFinishedError(f"{self.name} context already finished")
        data = bytes(data)
        self._message_byte_length += len(data)
        data = self._unprocessed + data
        full = len(data) // BLOCK_SIZE * BLOCK_SIZE
        for i in range(0, full, BLOCK_SIZE):
            self._h = compress(self._h, data[i:i + BLOCK_SIZE])
        self._unprocessed = data[full:]

    def finish(self) -> bytes:
        if self._result is not None:
            return self._result

        message_bit_length = self._message_byte_length * 8
        final = pad(self._unprocessed, message_bit_length)
        logger.debug(f"Finishing {self.name}: {message_bit_length} bits, "
                     f"{len(final) // BLOCK_SIZE} final block(s)")
        for i in range(0, len(final), BLOCK_SIZE):
            self._h = compress(self._h, final[i:i + BLOCK_SIZE])
        self._unprocessed = b''

        digest = b''.join(pack('>Q', h) for h in self._h)
        self._result = digest[:self._digest_size]
        return self._result

    def digest(self) -> bytes:
        if self._result is not None:
            return self._result
        # finish a copy so this context stays open
        return self.copy().finish()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> "SHA512Context":
        return copy.deepcopy(self)


def create(digest_bits: int) -> SHA512Context:
    return SHA512Context(digest_bits)


def sha384(data: bytes = b"") -> SHA512Context:
    return SHA512Context(SHA384, data)


def sha512(data: bytes = b"") -> SHA512Context:
    return SHA512Context(SHA512, data)
