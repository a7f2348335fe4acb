"""Field-by-field fuzzing of tar headers against an extractor."""

from __future__ import annotations

import argparse
import os
import sys
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from tarfuzz.extractor import ExtractorError, run_extractor
from tarfuzz.tarheader import default_header, write_archive

ARCHIVE_NAME = "archive.tar"
LEFTOVER_NAME = "delete.tar"
FUZZED_FIELDS = (
    "name",
    "mode",
    "uid",
    "gid",
    "size",
    "mtime",
    "chksum",
    "typeflag",
    "linkname",
    "magic",
    "version",
    "uname",
    "gname",
)
_UNEXPECTED_CHARS = b"\b\f\n\r\t\v\"' "


class TestCategory(Enum):
    """Kinds of malformed field content, named as in the report."""

    __test__ = False

    EMPTY = "Empty"
    NON_ASCII = "Non-Ascii"
    NUMBER = "Number"
    INT_MIN = "INT_MIN"
    NEGATIVE = "Negative"
    STRING = "String"
    NON_OCTAL = "Non-Octal"
    NULL_BYTE = "Null-Byte"
    NO_NULL_BYTE = "No-Null-Byte"
    NON_EXPECTED = "Non-Expected"


@dataclass
class FuzzResults:
    """Crashes found so far, per category and in total."""

    counts: Counter = field(default_factory=Counter)
    total: int = 0

    def record(self, category: TestCategory) -> int:
        """Count a crash and return its sequence number."""
        self.counts[category] += 1
        index = self.total
        self.total += 1
        return index

    def report(self) -> str:
        lines = ["", "Results for each Test"]
        lines += [f"{category.value}:{self.counts[category]}" for category in TestCategory]
        return "\n".join(lines) + "\n"


def _c_string(text: bytes, size: int) -> bytes:
    return text[: size - 1] + b"\0"


def field_payloads(size: int) -> Iterator[tuple[TestCategory, bytes]]:
    """The bytes written over the start of a field of ``size`` bytes, per case."""
    if size < 1:
        raise ValueError("field size must be positive")
    yield TestCategory.EMPTY, _c_string(b"", size)
    yield TestCategory.NON_ASCII, _c_string(b"\xe2", size)
    yield TestCategory.NUMBER, _c_string(b"1", size)
    yield TestCategory.INT_MIN, _c_string(b"-2147483648", size)
    yield TestCategory.NEGATIVE, _c_string(b"-1", size)
    yield TestCategory.STRING, _c_string(b"computer-sec", size)
    yield TestCategory.NON_OCTAL, b"8" * (size - 1) + b"\0"
    yield TestCategory.NULL_BYTE, bytes(size)
    yield TestCategory.NO_NULL_BYTE, b"0" * size
    for char in _UNEXPECTED_CHARS:
        yield TestCategory.NON_EXPECTED, bytes([char]) * (size - 1)


class Fuzzer:
    """Feeds fuzzed archives to an extractor and keeps those that crash it."""

    def __init__(self, extractor: str | os.PathLike[str], workdir: str | os.PathLike[str] | None = None):
        self.extractor = os.fspath(extractor)
        self.workdir = Path(workdir) if workdir is not None else Path.cwd()
        self.results = FuzzResults()

    def fuzz_field(self, name: str) -> list[Path]:
        """Try every payload on one field; return the archives that crashed."""
        size = default_header().field_size(name)
        archive = self.workdir / ARCHIVE_NAME
        saved: list[Path] = []
        for category, payload in field_payloads(size):
            write_archive(default_header().with_field(name, payload), archive)
            if run_extractor(self.extractor, archive):
                index = self.results.record(category)
                target = self.workdir / f"success_{index}.tar"
                try:
                    archive.replace(target)
                except FileNotFoundError:
                    continue
                saved.append(target)
            else:
                archive.unlink(missing_ok=True)
        return saved

    def run(self) -> FuzzResults:
        """Fuzz every header field in turn."""
        for name in FUZZED_FIELDS:
            self.fuzz_field(name)
        (self.workdir / LEFTOVER_NAME).unlink(missing_ok=True)
        return self.results


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="tarfuzz", description="Fuzz tar headers against an extractor."
    )
    parser.add_argument("extractor", help="path of the extractor to test")
    parser.add_argument(
        "--workdir", default=".", help="directory for the generated archives"
    )
    args = parser.parse_args(argv)

    fuzzer = Fuzzer(args.extractor, args.workdir)
    try:
        results = fuzzer.run()
    except (ExtractorError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(results.report(), end="")
    print(f"Successful Tars Created:{results.total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())