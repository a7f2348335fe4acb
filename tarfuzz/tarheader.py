"""USTAR header blocks and the archives built from them."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, fields, replace
from pathlib import Path

BLOCK_SIZE = 512
CHECKSUM_OFFSET = 148
CHECKSUM_SIZE = 8

_LAYOUT: tuple[tuple[str, int], ...] = (
    ("name", 100),
    ("mode", 8),
    ("uid", 8),
    ("gid", 8),
    ("size", 12),
    ("mtime", 12),
    ("chksum", 8),
    ("typeflag", 1),
    ("linkname", 100),
    ("magic", 6),
    ("version", 2),
    ("uname", 32),
    ("gname", 32),
    ("devmajor", 8),
    ("devminor", 8),
    ("prefix", 155),
    ("padding", 12),
)
FIELD_SIZES: dict[str, int] = dict(_LAYOUT)


def _c_string(text: bytes, size: int) -> bytes:
    """Text cut to fit ``size`` bytes together with its terminating NUL."""
    return text[: size - 1] + b"\0"


@dataclass(frozen=True)
class TarHeader:
    """A 512-byte tar header, one bytes value per field, padded with NULs."""

    name: bytes = bytes(100)
    mode: bytes = bytes(8)
    uid: bytes = bytes(8)
    gid: bytes = bytes(8)
    size: bytes = bytes(12)
    mtime: bytes = bytes(12)
    chksum: bytes = bytes(8)
    typeflag: bytes = bytes(1)
    linkname: bytes = bytes(100)
    magic: bytes = bytes(6)
    version: bytes = bytes(2)
    uname: bytes = bytes(32)
    gname: bytes = bytes(32)
    devmajor: bytes = bytes(8)
    devminor: bytes = bytes(8)
    prefix: bytes = bytes(155)
    padding: bytes = bytes(12)

    def __post_init__(self) -> None:
        for spec in fields(self):
            value = bytes(getattr(self, spec.name))
            size = FIELD_SIZES[spec.name]
            if len(value) > size:
                raise ValueError(
                    f"field {spec.name!r} holds {size} bytes, got {len(value)}"
                )
            object.__setattr__(self, spec.name, value.ljust(size, b"\0"))

    def field_size(self, name: str) -> int:
        """Size in bytes of the named field."""
        try:
            return FIELD_SIZES[name]
        except KeyError:
            raise ValueError(f"unknown header field {name!r}") from None

    def with_field(self, name: str, value: bytes) -> TarHeader:
        """A copy whose field starts with ``value``; the rest of it is kept."""
        size = self.field_size(name)
        value = bytes(value)
        if len(value) > size:
            raise ValueError(f"field {name!r} holds {size} bytes, got {len(value)}")
        current: bytes = getattr(self, name)
        return replace(self, **{name: value + current[len(value):]})

    def pack(self) -> bytes:
        """The header block with its checksum filled in."""
        raw = b"".join(getattr(self, name) for name, _ in _LAYOUT)
        digits = (b"%06o" % compute_checksum(raw))[:6]
        end = CHECKSUM_OFFSET + CHECKSUM_SIZE
        return raw[:CHECKSUM_OFFSET] + digits + b"\0 " + raw[end:]


def compute_checksum(block: bytes) -> int:
    """Unsigned byte sum of a header block, counting the checksum field as spaces."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"a header block is {BLOCK_SIZE} bytes, got {len(block)}")
    end = CHECKSUM_OFFSET + CHECKSUM_SIZE
    return sum(block[:CHECKSUM_OFFSET]) + CHECKSUM_SIZE * ord(" ") + sum(block[end:])


def default_header(mtime: int | None = None) -> TarHeader:
    """The baseline header every fuzz case starts from."""
    if mtime is None:
        mtime = int(time.time())
    padding = b"1111111"
    return TarHeader(
        name=_c_string(b"delete.tar", 100),
        mode=_c_string(b"07777", 8),
        uid=_c_string(padding, 8),
        gid=_c_string(padding, 8),
        size=_c_string(b"%011o" % BLOCK_SIZE, 12),
        mtime=_c_string(b"%011o" % int(mtime), 12),
        typeflag=b"1",
        linkname=_c_string(b"k" * 99, 100),
        magic=_c_string(b"ustar", 6),
        version=b"00",
        uname=_c_string(b"RANDOM", 32),
        gname=_c_string(b"RANDOM_GROUP", 32),
        devmajor=_c_string(padding, 8),
        devminor=_c_string(padding, 8),
    )


def write_archive(header: TarHeader, path: str | os.PathLike[str] = "archive.tar") -> Path:
    """Write an archive holding the header and two empty end blocks."""
    target = Path(path)
    target.write_bytes(header.pack() + bytes(2 * BLOCK_SIZE))
    return target