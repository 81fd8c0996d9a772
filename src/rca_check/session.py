"""Per-run accumulator handed from the output stream to the check runner."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from .annotations import extract_annotations
from .models import Annotation, Space
from .parser import parse_record
from .report import render_report


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


@dataclass
class CheckRunSession:
    """State accumulated over one reporting cycle.

    Records and annotations are appended while the tool output streams in;
    the session is then handed to ``CheckRunner.execute`` which owns it
    until the cycle reaches a terminal state.
    """

    version: str = ""
    started_at: str = field(default_factory=utcnow_iso)
    records: List[Space] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    check_run_id: Optional[int] = None

    def add(self, record: Space) -> None:
        self.records.append(record)
        self.annotations.extend(extract_annotations(record))

    def ingest(self, line: str) -> Optional[Space]:
        """Parse one line of tool output; keep it only if it is a record."""
        record = parse_record(line)
        if record is not None:
            self.add(record)
        return record

    def report(self) -> str:
        return render_report(self.records, self.version)
