"""Tests for Markdown report rendering."""

import json

from rca_check.models import Space
from rca_check.parser import parse_record
from rca_check.report import (
    SEPARATOR,
    format_number,
    render_metrics,
    render_report,
    render_space,
    summarize_metrics,
)


def _space(data):
    return Space.from_dict(data)


class TestFormatNumber:
    def test_integral_float_drops_fraction(self):
        assert format_number(2.0) == "2"

    def test_fraction_is_kept(self):
        assert format_number(1.5) == "1.5"

    def test_int_unchanged(self):
        assert format_number(7) == "7"

    def test_missing_value_rendered_as_null(self):
        assert format_number(None) == "null"


class TestRenderMetrics:
    def test_contains_every_group(self, space_dict):
        text = render_metrics(_space(space_dict("a.rs", nargs=2)).metrics)
        assert "Nargs: 2" in text
        for title in ("Cyclomatic", "Loc", "Nom", "Halstead", "Maintainability Index"):
            assert f"<summary>{title}</summary>" in text
        assert "- Estimated program length: 6.754887502163468" in text
        assert "- Visual studio: 81.345" in text
        assert text.count("<details>") == text.count("</details>") == 5


class TestRenderSpace:
    def test_leaf_has_no_spaces_heading(self, space_dict):
        text = render_space(_space(space_dict("a.rs")))
        assert "<b>global/metrics</b>" in text
        assert "<b>spaces</b>" not in text

    def test_every_child_rendered_once_in_order(self, nested_file):
        text = render_space(_space(nested_file))
        positions = [text.index(f"<b>{name}</b>") for name in ("parse", "render")]
        assert positions == sorted(positions)
        assert text.count("<b>parse</b>") == 1
        assert text.count("<b>render</b>") == 1
        # root and "parse" both have children
        assert text.count("<b>spaces</b>") == 2

    def test_anonymous_name_substituted_only_in_text(self, nested_file):
        space = _space(nested_file)
        text = render_space(space)
        assert "&lt;anonymous&gt;" not in text
        assert "<anonymous>" not in text
        assert "<b>unnamed space</b>" in text
        assert space.spaces[0].spaces[1].name == "<anonymous>"

    def test_names_are_html_escaped(self, space_dict):
        text = render_space(_space(space_dict("<closure>")))
        assert "<b>&lt;closure&gt;</b>" in text

    def test_details_are_balanced(self, nested_file):
        text = render_space(_space(nested_file))
        assert text.count("<details>") == text.count("</details>")


class TestRenderReport:
    def test_header_names_tool_and_version(self):
        text = render_report([], "0.0.25")
        assert text.startswith("## Info")
        assert "| rust-code-analysis-cli | 0.0.25 |" in text
        assert "## Results" in text

    def test_blocks_joined_by_separator(self, space_dict):
        records = [_space(space_dict("a.rs")), _space(space_dict("b.rs"))]
        text = render_report(records, "1.0.0")
        assert text.count(SEPARATOR) == 1
        assert text.index("<b>a.rs</b>") < text.index("<b>b.rs</b>")

    def test_rendering_is_deterministic(self, nested_line, space_dict):
        records = [parse_record(nested_line), parse_record(json.dumps(space_dict("b.rs")))]
        assert render_report(records, "v") == render_report(records, "v")

    def test_noise_never_reaches_report(self, space_dict):
        lines = [json.dumps(space_dict("a.rs", nargs=2)), "Diagnostic: LEAKED-LINE"]
        records = [r for r in map(parse_record, lines) if r is not None]
        text = render_report(records, "v")
        assert "LEAKED-LINE" not in text
        assert text.count("<b>a.rs</b>") == 1


class TestSummarizeMetrics:
    def test_one_line(self, space_dict):
        summary = summarize_metrics(_space(space_dict("f", cognitive=3)).metrics)
        assert "\n" not in summary
        assert "Cognitive: 3" in summary
        assert "MI: 81.34" in summary or "MI: 81.35" in summary

    def test_null_maintainability_index(self, space_dict):
        data = space_dict("f")
        data["metrics"]["mi"]["mi_visual_studio"] = None
        assert summarize_metrics(_space(data).metrics).endswith("MI: null")


class TestNullMetrics:
    def test_null_values_are_rendered(self, space_dict):
        data = space_dict("a.rs")
        data["metrics"]["halstead"]["purity_ratio"] = None
        text = render_metrics(_space(data).metrics)
        assert "- Purity ratio: null" in text
