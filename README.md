# tarfuzz

`tarfuzz` looks for tar headers that crash a tar extractor. For each header
field (`name`, `mode`, `uid`, `gid`, `size`, `mtime`, `chksum`, `typeflag`,
`linkname`, `magic`, `version`, `uname`, `gname`), it starts from a valid
default header. It then writes a series of hostile payloads over the start of
that field:

- an empty value
- a lone non-ASCII byte (`0xE2`)
- the numbers `1`, `-1` and `-2147483648`
- the string `computer-sec`
- non-octal digits (`8` repeated)
- all NUL bytes
- all `0` digits with no terminating NUL
- the field filled with one of backspace, form feed, newline, carriage return,
  tab, vertical tab, a double quote, a single quote or a space

For each payload it writes `archive.tar` into the working directory. The
archive holds the header with a correct checksum, followed by two empty
blocks. `tarfuzz` then runs `<extractor> archive.tar`. A payload counts as a
success when the first line the extractor writes to standard output is exactly:

```
*** The program has crashed ***
```

## Usage

```
tarfuzz ./extractor_x86_64
tarfuzz ./extractor_x86_64 --workdir /tmp/fuzz
```

Each archive that crashes the extractor is kept in the working directory as
`success_0.tar`, `success_1.tar`, and so on. Archives that do not crash it are
removed, and so is any leftover `delete.tar`. At the end of the run `tarfuzz`
prints two things: how many successes each payload category produced
(`Empty`, `Non-Ascii`, `Number`, `INT_MIN`, `Negative`, `String`, `Non-Octal`,
`Null-Byte`, `No-Null-Byte`, `Non-Expected`), and the total number of archives
it kept. If the extractor cannot be started, the command prints an error and
exits with status 1.

## Library use

```python
from tarfuzz.tarheader import default_header, write_archive
from tarfuzz.extractor import run_extractor
from tarfuzz.fuzzer import Fuzzer, field_payloads

header = default_header(mtime=0).with_field("mode", b"8888888")
write_archive(header, "archive.tar")
crashed = run_extractor("./extractor_x86_64", "archive.tar")

fuzzer = Fuzzer("./extractor_x86_64", ".")
kept = fuzzer.fuzz_field("uid")   # paths of the crashing archives
results = fuzzer.run()            # every field in turn
print(results.report())
print(results.total)
```

- `tarfuzz.tarheader`
  - `TarHeader` is an immutable 512-byte header.
  - `with_field` returns a copy with the start of one field replaced.
  - `pack` returns the block with its checksum filled in.
  - `compute_checksum` sums a block, counting the checksum field as spaces.
  - `default_header` builds the baseline header.
  - `write_archive` writes the header followed by two empty blocks.
- `tarfuzz.extractor.run_extractor` returns `True` when the extractor's first
  output line is the crash message. It raises `ExtractorError` when the
  extractor cannot be started, for instance when it does not exist or is not
  executable.
- `tarfuzz.fuzzer.field_payloads(size)` yields `(TestCategory, bytes)` pairs
  for a field of the given size. `FuzzResults` keeps the counts per category.

## Limits

A crash is detected only from the message on the extractor's first output
line. Signals, exit codes and hangs are not examined. Each test archive holds
a single header and no file data.

## Tests

```
pip install -e ".[test]"
pytest
```