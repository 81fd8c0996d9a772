"""Markdown rendering of space trees for the check-run output text.

Every space becomes a collapsible ``<details>`` block. Nesting is carried by
the HTML elements rather than by indentation, since Markdown turns lines
indented by four or more spaces into code blocks.
"""

from html import escape
from typing import List, Optional, Sequence

from .models import Metrics, Space

TOOL_NAME = "rust-code-analysis-cli"
SEPARATOR = "\n\n---\n\n"
# Shown for metrics the tool could not compute
NULL_VALUE = "null"


def format_number(value: Optional[float]) -> str:
    """Render a metric the way the tool prints it (``2`` rather than ``2.0``)."""
    if value is None:
        return NULL_VALUE
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _group(title: str, items: Sequence[tuple], indent: str) -> List[str]:
    lines = [f"{indent}<details>", f"{indent}<summary>{title}</summary>", ""]
    lines.extend(f"{indent}- {label}: {format_number(value)}" for label, value in items)
    lines.append(f"{indent}</details>")
    return lines


def render_metrics(metrics: Metrics, indent: str = "  ") -> str:
    """Render one metrics bundle as Markdown lines with collapsible groups."""
    h = metrics.halstead
    lines = [
        f"{indent}Nargs: {format_number(metrics.nargs)}",
        "",
        f"{indent}Nexits: {format_number(metrics.nexits)}",
        "",
        f"{indent}Cognitive: {format_number(metrics.cognitive)}",
    ]
    lines += _group(
        "Cyclomatic",
        [("Sum", metrics.cyclomatic.sum), ("Average", metrics.cyclomatic.average)],
        indent,
    )
    lines += _group(
        "Loc",
        [
            ("Sloc", metrics.loc.sloc),
            ("Ploc", metrics.loc.ploc),
            ("Lloc", metrics.loc.lloc),
            ("Cloc", metrics.loc.cloc),
            ("Blank", metrics.loc.blank),
        ],
        indent,
    )
    lines += _group(
        "Nom",
        [
            ("Functions", metrics.nom.functions),
            ("Closures", metrics.nom.closures),
            ("Total", metrics.nom.total),
        ],
        indent,
    )
    lines += _group(
        "Halstead",
        [
            ("n1", h.n1),
            ("N1", h.N1),
            ("n2", h.n2),
            ("N2", h.N2),
            ("Length", h.length),
            ("Estimated program length", h.estimated_program_length),
            ("Purity ratio", h.purity_ratio),
            ("Vocabulary", h.vocabulary),
            ("Volume", h.volume),
            ("Difficulty", h.difficulty),
            ("Level", h.level),
            ("Effort", h.effort),
            ("Time", h.time),
            ("Bugs", h.bugs),
        ],
        indent,
    )
    lines += _group(
        "Maintainability Index",
        [
            ("Original", metrics.mi.mi_original),
            ("Visual studio", metrics.mi.mi_visual_studio),
            ("Sei", metrics.mi.mi_sei),
        ],
        indent,
    )
    return "\n".join(lines)


def render_space(space: Space) -> str:
    """Render a space and, recursively, all of its nested spaces."""
    lines = [
        "<details>",
        f"<summary><b>{escape(space.display_name)}</b> ({escape(space.kind)}, "
        f"lines {space.start_line}-{space.end_line})</summary>",
        "",
        "<b>global/metrics</b>",
        "",
        render_metrics(space.metrics),
    ]
    if space.spaces:
        lines += ["", "<details>", "<summary><b>spaces</b></summary>", ""]
        lines += [render_space(child) for child in space.spaces]
        lines.append("</details>")
    lines.append("</details>")
    return "\n".join(lines)


def render_report(records: Sequence[Space], version: str) -> str:
    """Render the full report for all records collected in one run."""
    header = f"""## Info
|          Name          |    Version    |
|:----------------------:|:-------------:|
| {TOOL_NAME} | {version} |

## Results

"""
    return header + SEPARATOR.join(render_space(record) for record in records)


def _rounded(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 2)


def summarize_metrics(metrics: Metrics) -> str:
    """One-line summary used as annotation message."""
    parts = [
        f"Cyclomatic: {format_number(metrics.cyclomatic.sum)}",
        f"Cognitive: {format_number(metrics.cognitive)}",
        f"Nargs: {format_number(metrics.nargs)}",
        f"Nexits: {format_number(metrics.nexits)}",
        f"Sloc: {format_number(metrics.loc.sloc)}",
        f"MI: {format_number(_rounded(metrics.mi.mi_visual_studio))}",
    ]
    return ", ".join(parts)
