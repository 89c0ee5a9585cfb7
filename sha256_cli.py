"""SHA-256 implementation built on `compress64` from `compress.py`.

This module provides:

- `sha256(data: bytes) -> bytes`: compute the SHA-256 digest of arbitrary data.
- `bytes_to_hex(data: bytes) -> str`: lowercase hex rendering of a digest.
- CLI usage: `python sha256_cli.py "message"` prints the hex digest of the
  UTF-8 encoding of `"message"`.

The hash state is an 8-tuple that is created from `H_INIT` on every call and
threaded through the blocks as a value, so calls share nothing but the
read-only constant tables.
"""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from compress import H_INIT, MASK32, State, compress64, small_sigma0, small_sigma1


BLOCK_SIZE = 64

# The padded length field is 64 bits wide.
MAX_MESSAGE_BITS = (1 << 64) - 1


def pad_message(message: bytes) -> bytes:
    """Pad `message` according to FIPS 180-4, section 5.1.1.

    Appends the `0x80` marker, the minimum number of zero bytes, and the
    original length in bits as a 64-bit big-endian integer. The result length
    is always a positive multiple of 64 bytes.
    """
    ml_bits = len(message) * 8
    if ml_bits > MAX_MESSAGE_BITS:
        raise ValueError(
            f"Message of {len(message)} bytes does not fit the 64-bit length field"
        )

    zeros = (BLOCK_SIZE - (len(message) + 1 + 8) % BLOCK_SIZE) % BLOCK_SIZE

    padded = bytearray(message)
    padded.append(0x80)
    padded.extend(b"\x00" * zeros)
    padded.extend(ml_bits.to_bytes(8, byteorder="big"))
    return bytes(padded)


def split_into_blocks(padded: bytes) -> List[bytes]:
    """Split a padded message into consecutive 512-bit (64-byte) blocks."""
    if len(padded) % BLOCK_SIZE != 0:
        raise ValueError(
            f"Padded message length must be a multiple of 64 bytes, got {len(padded)}"
        )
    return [padded[i : i + BLOCK_SIZE] for i in range(0, len(padded), BLOCK_SIZE)]


def block_to_words(block: bytes) -> Tuple[int, ...]:
    """Interpret a 64-byte block as 16 big-endian 32-bit words."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected 64-byte block, got {len(block)}")
    return tuple(
        int.from_bytes(block[4 * i : 4 * (i + 1)], byteorder="big") for i in range(16)
    )


def words_to_bytes(words: Iterable[int]) -> bytes:
    """Serialize 32-bit words as big-endian bytes, in order."""
    return b"".join((word & MASK32).to_bytes(4, byteorder="big") for word in words)


def build_message_schedule(block: bytes) -> List[int]:
    """Given a 512-bit block, build the 64-word message schedule w[0..63]."""
    w: List[int] = list(block_to_words(block)) + [0] * 48

    for t in range(16, 64):
        s0 = small_sigma0(w[t - 15])
        s1 = small_sigma1(w[t - 2])
        w[t] = (s1 + w[t - 7] + s0 + w[t - 16]) & MASK32

    return w


def add_states(state: Sequence[int], work: Sequence[int]) -> State:
    """Element-wise sum of the hash state and the working registers a..h."""
    return tuple((h + x) & MASK32 for h, x in zip(state, work))


def compress_block(
    state: State, block: bytes, trace: Optional[List[State]] = None
) -> State:
    """Process one 64-byte block and return the next hash state."""
    ws = build_message_schedule(block)
    work_out = compress64(*state, ws, trace=trace)
    return add_states(state, work_out)


def sha256(data: bytes) -> bytes:
    """Compute the 32-byte SHA-256 digest of `data`.

    1. Start from the initial hash values.
    2. Pad the message and split it into 512-bit blocks.
    3. Compress the blocks in order, each one updating the hash state.
    4. Serialize the final state H0..H7 as big-endian bytes.
    """
    state = H_INIT
    for block in split_into_blocks(pad_message(bytes(data))):
        state = compress_block(state, block)
    return words_to_bytes(state)


def sha256_with_trace(data: bytes) -> Tuple[bytes, List[List[State]]]:
    """Compute SHA-256 while recording the working state after every round.

    Returns:
        (digest, traces)
        where traces[block_idx] is the list of 64 working states for that block
    """
    state = H_INIT
    traces: List[List[State]] = []
    for block in split_into_blocks(pad_message(bytes(data))):
        rounds: List[State] = []
        state = compress_block(state, block, trace=rounds)
        traces.append(rounds)
    return words_to_bytes(state), traces


def bytes_to_hex(data: bytes) -> str:
    """Render `data` as two lowercase hex digits per byte, no separators."""
    return bytes(data).hex()


def hexdigest(data: bytes) -> str:
    """Convenience helper to return the SHA-256 hex digest of `data`."""
    return bytes_to_hex(sha256(data))


#
# Command line
#

MENU = (
    "\nChoose an option:\n"
    "1. Test with standard test vectors\n"
    "2. Hash custom input\n"
    "3. Exit\n"
)


def interactive(
    vectors_path: Optional[str] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Menu loop: run the test vectors, hash a line of text, or exit."""
    # Imported here so `check_vectors` may depend on this module.
    from check_vectors import load_vectors, run_vectors

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    print("=== SHA-256 Hash Calculator ===", file=stdout)
    while True:
        print(MENU, end="", file=stdout)
        print("Enter your choice (1-3): ", end="", flush=True, file=stdout)
        line = stdin.readline()
        if not line:
            # EOF behaves like "Exit".
            print(file=stdout)
            return 0

        choice = line.strip()
        if choice == "1":
            print("\n=== SHA-256 Test Vectors ===", file=stdout)
            try:
                run_vectors(load_vectors(vectors_path), out=stdout)
            except (OSError, ValueError) as e:
                sys.stderr.write(f"Error loading test vectors: {e}\n")
            print("Test vectors completed.", file=stdout)
        elif choice == "2":
            print("\n=== Custom Input ===", file=stdout)
            print("Enter text to hash: ", end="", flush=True, file=stdout)
            text = stdin.readline()
            if not text:
                print(file=stdout)
                return 0
            text = text.rstrip("\r\n")
            print(f"SHA-256 hash: {hexdigest(text.encode('utf-8'))}", file=stdout)
        elif choice == "3":
            print("Exiting...", file=stdout)
            return 0
        else:
            print("Invalid choice. Please try again.", file=stdout)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha256_cli.py",
        description="Compute SHA-256 digests with a pure-Python implementation",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "message",
        nargs="?",
        help="Text to hash (UTF-8 encoded)",
    )
    source.add_argument(
        "-f",
        "--file",
        help="Hash the raw bytes of this file",
    )
    source.add_argument(
        "--vectors",
        nargs="?",
        const="",
        metavar="PATH",
        help="Check the published test vectors (default: the built-in set)",
    )
    source.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Run the interactive menu",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Usage:
        python sha256_cli.py "message"
        python sha256_cli.py -f path/to/file
        python sha256_cli.py --vectors [path/to/vectors.yaml]
        python sha256_cli.py --interactive

    Without arguments the interactive menu runs when stdin is a terminal;
    otherwise stdin is read and hashed as raw bytes.
    """
    args = _build_parser().parse_args(argv)

    if args.interactive:
        return interactive()

    if args.vectors is not None:
        from check_vectors import load_vectors, run_vectors

        try:
            vectors = load_vectors(args.vectors or None)
        except (OSError, ValueError) as e:
            sys.stderr.write(f"Error loading test vectors: {e}\n")
            return 1
        return 0 if run_vectors(vectors) else 1

    if args.file is not None:
        try:
            with open(args.file, "rb") as f:
                data = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{args.file}': {e}\n")
            return 1
        print(hexdigest(data))
        return 0

    if args.message is not None:
        print(hexdigest(args.message.encode("utf-8")))
        return 0

    if sys.stdin.isatty():
        return interactive()

    print(hexdigest(sys.stdin.buffer.read()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
