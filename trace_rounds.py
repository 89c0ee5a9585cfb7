"""Dump a round-by-round SHA-256 trace of a message as YAML.

For each 512-bit block this records the 64-word message schedule and the
working state (a..h) after every round, so a single round can be checked by
hand against FIPS 180-4 appendix examples.

Usage:
    python trace_rounds.py "abc"
    python trace_rounds.py -f path/to/file -o trace.yaml
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List

import yaml

from compress import H_INIT
from sha256_cli import (
    build_message_schedule,
    bytes_to_hex,
    pad_message,
    sha256_with_trace,
    split_into_blocks,
)


def _format_state(state) -> str:
    """Return a compact hex representation of an 8-word state."""
    return " ".join(f"{w:08x}" for w in state)


def build_trace(message: bytes) -> Dict:
    padded = pad_message(message)
    blocks = split_into_blocks(padded)
    digest, traces = sha256_with_trace(message)

    result: Dict = {
        "message_hex": bytes_to_hex(message),
        "message_length_bytes": len(message),
        "padded_length_bytes": len(padded),
        "block_count": len(blocks),
        "initial_state": _format_state(H_INIT),
        "digest_hex": bytes_to_hex(digest),
        "blocks": [],
    }

    for block_idx, (block, rounds) in enumerate(zip(blocks, traces)):
        ws = build_message_schedule(block)
        entry: Dict = {
            "block_index": block_idx,
            "block_hex": bytes_to_hex(block),
            "schedule": [f"{w:08x}" for w in ws],
            "rounds": [_format_state(state) for state in rounds],
        }
        result["blocks"].append(entry)

    return result


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Dump the per-round SHA-256 working state of a message as YAML"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("message", nargs="?", help="Text to trace (UTF-8 encoded)")
    source.add_argument("-f", "--file", help="Trace the raw bytes of this file")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write the YAML trace here instead of stdout",
    )
    args = parser.parse_args(argv)

    if args.file is not None:
        try:
            with open(args.file, "rb") as f:
                message = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{args.file}': {e}\n")
            return 1
    else:
        message = args.message.encode("utf-8")

    trace = build_trace(message)

    if args.output is None:
        yaml.dump(trace, sys.stdout, default_flow_style=False, sort_keys=False)
        return 0

    try:
        with open(args.output, "w") as f:
            yaml.dump(trace, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        sys.stderr.write(f"Error writing '{args.output}': {e}\n")
        return 1

    print(f"Wrote {trace['block_count']} block(s) to {args.output}")
    print(f"digest: {trace['digest_hex']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
