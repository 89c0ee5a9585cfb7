"""Check the pure-Python SHA-256 against published test vectors.

Vectors are YAML, as a list of mappings:

    - name: '"abc"'
      message: abc
      digest: ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad

`message` is hashed as its UTF-8 encoding, repeated `repeat` times when that
key is present. `digest` must be a string of 64 lowercase hex characters;
quote it if it happens to contain only digits.

The published FIPS 180-4 vectors are built in (`DEFAULT_VECTORS_YAML`);
`--file` checks another YAML file instead.

Usage:
    python check_vectors.py
    python check_vectors.py --file other_vectors.yaml
    python check_vectors.py --quiet     # only the exit status and failures
"""

from __future__ import annotations

import argparse
import re
import sys
from typing import List, NamedTuple, Optional, Sequence, TextIO

import yaml

from sha256_cli import hexdigest


DEFAULT_VECTORS_YAML = """\
- name: Empty string
  message: ""
  digest: e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855
- name: '"abc"'
  message: abc
  digest: ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad
- name: Long message
  message: abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq
  digest: 248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1
- name: 896-bit message
  message: abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmnhijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu
  digest: cf5b16a778af8380036ce59e7b0492370b249b11e8f07a51afac45037afee9d1
- name: One million "a"
  message: a
  repeat: 1000000
  digest: cdc76e5c9914fb9281a1c7e284d73e67f1809a48a497200e046d39ccc7112cd0
"""

_DIGEST_RE = re.compile(r"^[0-9a-f]{64}$")


class Vector(NamedTuple):
    name: str
    message: bytes
    digest: str


class VectorResult(NamedTuple):
    vector: Vector
    computed: str

    @property
    def ok(self) -> bool:
        return self.computed == self.vector.digest


def _parse_vector(idx: int, entry) -> Vector:
    if not isinstance(entry, dict):
        raise ValueError(f"Vector {idx}: expected a mapping, got {type(entry).__name__}")

    for key in ("message", "digest"):
        if key not in entry:
            raise ValueError(f"Vector {idx}: missing '{key}'")

    message = entry["message"]
    if message is None:
        message = ""
    if not isinstance(message, str):
        raise ValueError(f"Vector {idx}: 'message' must be a string")

    repeat = entry.get("repeat", 1)
    # bool is an int subclass, so `repeat: true` must be excluded explicitly.
    if isinstance(repeat, bool) or not isinstance(repeat, int) or repeat < 1:
        raise ValueError(f"Vector {idx}: 'repeat' must be a positive integer, got {repeat!r}")

    # An unquoted all-digit digest loads as an int and has lost its leading zeros.
    digest = entry["digest"]
    if not isinstance(digest, str):
        raise ValueError(
            f"Vector {idx}: digest must be a quoted string, got {type(digest).__name__}"
        )
    digest = digest.strip().lower()
    if not _DIGEST_RE.match(digest):
        raise ValueError(
            f"Vector {idx}: digest must be exactly 64 hex characters, "
            f"got {len(digest)} ({digest!r})"
        )

    name = str(entry.get("name") or f"vector {idx}")
    return Vector(name=name, message=message.encode("utf-8") * repeat, digest=digest)


def parse_vectors(text: str, source: str = "<vectors>") -> List[Vector]:
    """Parse and validate test vectors from a YAML document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {source}: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"{source}: expected a list of vectors")

    return [_parse_vector(idx, entry) for idx, entry in enumerate(data)]


def load_vectors(path: Optional[str] = None) -> List[Vector]:
    """Load test vectors from a YAML file, or the built-in set when `path` is None.

    Raises `OSError` if the file cannot be read and `ValueError` if its
    contents are not a list of well-formed vectors.
    """
    if path is None:
        return parse_vectors(DEFAULT_VECTORS_YAML, source="built-in vectors")

    with open(path, "r", encoding="utf-8") as f:
        return parse_vectors(f.read(), source=path)


def check_vector(vector: Vector) -> VectorResult:
    return VectorResult(vector=vector, computed=hexdigest(vector.message))


def run_vectors(
    vectors: Sequence[Vector], out: Optional[TextIO] = None, quiet: bool = False
) -> bool:
    """Hash every vector and print a Computed / Expected / Match report.

    Returns True if all vectors matched.
    """
    out = out or sys.stdout
    all_ok = True

    for vector in vectors:
        result = check_vector(vector)
        all_ok = all_ok and result.ok
        if quiet and result.ok:
            continue
        print(f"{vector.name}:", file=out)
        print(f"Computed: {result.computed}", file=out)
        print(f"Expected: {vector.digest}", file=out)
        print(f"Match: {'true' if result.ok else 'false'}", file=out)
        print(file=out)

    return all_ok


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check SHA-256 against published test vectors"
    )
    parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="YAML file with test vectors (default: the built-in FIPS 180-4 set)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report mismatching vectors",
    )
    args = parser.parse_args(argv)

    try:
        vectors = load_vectors(args.file)
    except (OSError, ValueError) as e:
        sys.stderr.write(f"Error loading test vectors: {e}\n")
        return 1

    ok = run_vectors(vectors, quiet=args.quiet)
    if not args.quiet:
        print(f"{len(vectors)} vectors checked, {'all match' if ok else 'MISMATCH'}")
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
