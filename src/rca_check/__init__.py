"""
rca-check - publish rust-code-analysis metrics as a GitHub check run.

Reads the JSON space trees printed by rust-code-analysis-cli, renders them
into a collapsible Markdown report, annotates every nested space with its
metrics, and posts both through the Checks API.
"""

__version__ = "0.1.0"

from .check import CheckOptions, CheckRunner, CheckRunState  # noqa: E402
from .models import Annotation, Metrics, Space  # noqa: E402
from .session import CheckRunSession  # noqa: E402
from .parser import parse_record  # noqa: E402
from .report import render_report  # noqa: E402

__all__ = [
    "CheckRunner",
    "CheckOptions",
    "CheckRunState",
    "CheckRunSession",
    "Space",
    "Metrics",
    "Annotation",
    "parse_record",
    "render_report",
]
