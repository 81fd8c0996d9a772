"""Tolerant parsing of rust-code-analysis-cli JSON output.

The tool prints one JSON document per analysed file, but its stdout can be
interleaved with diagnostics. A line either decodes into a complete space
tree or is dropped.
"""

import json
from typing import Iterable, Iterator, Optional

from .logging_config import get_logger
from .models import Space

logger = get_logger(__name__)


def parse_record(line: str) -> Optional[Space]:
    """Decode one output line, returning None for anything that is not a record."""
    text = line.strip()
    if not text:
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Not a JSON, ignoring it: %.80s", text)
        return None

    try:
        return Space.from_dict(data)
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        logger.debug("JSON line is not a space tree (%s), ignoring it", e)
        return None


def parse_lines(lines: Iterable[str]) -> Iterator[Space]:
    """Yield every record found in ``lines``, in order."""
    for line in lines:
        record = parse_record(line)
        if record is not None:
            yield record
