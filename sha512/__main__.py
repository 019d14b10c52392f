import argparse
import logging
import sys
from typing import BinaryIO, List, Optional

from .engine import SHA384, SHA512, SHA512Context
from .selftest import SelfTestError, run_self_test

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def hash_stream(stream: BinaryIO, digest_bits: int = SHA512) -> str:
    ctx = SHA512Context(digest_bits)
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        ctx.update(chunk)
    return ctx.finish().hex()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha512",
        description="Print SHA-512 / SHA-384 checksums or run the FIPS 180-2 self test.")
    parser.add_argument("files", nargs="*", metavar="FILE",
                        help="files to hash; '-' or nothing reads standard input")
    parser.add_argument("--bits", type=int, choices=(SHA384, SHA512), default=SHA512,
                        help="digest size in bits (default: 512)")
    parser.add_argument("--self-test", action="store_true",
                        help="run the known-answer tests and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    if args.self_test:
        try:
            run_self_test(verbose=True)
        except SelfTestError as e:
            logger.error(f"Self test failed: {e}")
            return 1
        logger.info("All self tests passed")
        return 0

    status = 0
    for name in args.files or ["-"]:
        if name == "-":
            print(f"{hash_stream(sys.stdin.buffer, args.bits)}  -")
            continue
        try:
            with open(name, "rb") as f:
                digest = hash_stream(f, args.bits)
        except OSError as e:
            logger.error(f"Cannot read {name}: {e}")
            status = 1
            continue
        print(f"{digest}  {name}")
    return status


if __name__ == "__main__":
    sys.exit(main())
