"""GitHub Actions workflow commands written to stdout."""

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO


def _escape(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape(value).replace(":", "%3A").replace(",", "%2C")


def _out(stream: Optional[TextIO]) -> TextIO:
    return stream if stream is not None else sys.stdout


@contextmanager
def group(title: str, stream: Optional[TextIO] = None) -> Iterator[None]:
    """Fold everything logged inside the block under ``title`` in the job log."""
    out = _out(stream)
    out.write(f"::group::{_escape(title)}\n")
    out.flush()
    try:
        yield
    finally:
        out.write("::endgroup::\n")
        out.flush()


def set_failed(message: str, stream: Optional[TextIO] = None) -> None:
    """Mark the step as failed with ``message``; the caller sets the exit status."""
    out = _out(stream)
    out.write(f"::error::{_escape(message)}\n")
    out.flush()


def notice(
    message: str,
    file: Optional[str] = None,
    line: Optional[int] = None,
    end_line: Optional[int] = None,
    title: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Emit a notice, optionally tied to a line range of ``file``."""
    props = [
        f"{key}={_escape_property(str(value))}"
        for key, value in (("file", file), ("line", line), ("endLine", end_line), ("title", title))
        if value is not None
    ]
    command = "::notice " + ",".join(props) if props else "::notice"
    out = _out(stream)
    out.write(f"{command}::{_escape(message)}\n")
    out.flush()
