"""Running an extractor on an archive and detecting its crash report."""

from __future__ import annotations

import logging
import os
import subprocess

CRASH_MESSAGE = b"*** The program has crashed ***\n"

log = logging.getLogger(__name__)


class ExtractorError(RuntimeError):
    """The extractor could not be started."""


def run_extractor(
    extractor: str | os.PathLike[str],
    archive: str | os.PathLike[str] = "archive.tar",
) -> bool:
    """Run ``extractor archive`` and tell whether its first line reports a crash."""
    command = [os.fspath(extractor), os.fspath(archive)]
    try:
        with subprocess.Popen(
            command, stdin=subprocess.DEVNULL, stdout=subprocess.PIPE
        ) as proc:
            assert proc.stdout is not None
            first_line = proc.stdout.readline()
    except OSError as exc:
        raise ExtractorError(f"cannot run {command[0]}: {exc}") from exc

    if not first_line:
        log.debug("no output")
        return False
    if first_line != CRASH_MESSAGE:
        log.debug("not the crash message")
        return False
    log.debug("crash message")
    return True