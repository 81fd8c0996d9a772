"""Tests for the space-tree model and the per-run session."""

import json

import pytest

from rca_check.models import UNNAMED_LABEL, Space
from rca_check.session import CheckRunSession


class TestSpaceDecoding:
    def test_decodes_nested_tree(self, nested_file):
        space = Space.from_dict(nested_file)
        assert space.name == "src/lib.rs"
        assert space.kind == "unit"
        assert [s.name for s in space.spaces] == ["parse", "render"]
        assert [s.name for s in space.spaces[0].spaces] == ["<closure>", "<anonymous>"]
        assert space.spaces[1].is_leaf

    def test_metrics_are_typed(self, space_dict):
        space = Space.from_dict(space_dict("a.rs", nargs=2, cognitive=4.5))
        assert space.metrics.nargs == 2
        assert space.metrics.cognitive == 4.5
        assert space.metrics.halstead.N1 == 4.0
        assert space.metrics.mi.mi_sei == 123.4

    def test_missing_metric_group_is_rejected(self, space_dict):
        data = space_dict("a.rs")
        del data["metrics"]["loc"]
        with pytest.raises(KeyError):
            Space.from_dict(data)

    def test_non_numeric_metric_is_rejected(self, space_dict):
        data = space_dict("a.rs", nargs="two")
        with pytest.raises(TypeError):
            Space.from_dict(data)

    def test_bad_child_rejects_whole_tree(self, space_dict):
        child = space_dict("f")
        del child["end_line"]
        with pytest.raises(KeyError):
            Space.from_dict(space_dict("a.rs", spaces=[child]))

    def test_malformed_bounds_pass_through(self, space_dict):
        space = Space.from_dict(space_dict("a.rs", 9, 3))
        assert (space.start_line, space.end_line) == (9, 3)

    def test_round_trip_keeps_tool_field_names(self, nested_file):
        assert Space.from_dict(nested_file).to_dict() == nested_file


class TestSpaceNaming:
    @pytest.mark.parametrize("name", ["<anonymous>", None, ""])
    def test_anonymous_names_get_label(self, space_dict, name):
        space = Space.from_dict(space_dict(name))
        assert space.display_name == UNNAMED_LABEL
        assert space.name == name

    def test_regular_name_is_kept(self, space_dict):
        assert Space.from_dict(space_dict("main")).display_name == "main"


class TestWalk:
    def test_depth_first_document_order(self, nested_file):
        space = Space.from_dict(nested_file)
        assert [s.start_line for s in space.walk()] == [2, 5, 10, 22]

    def test_leaf_has_no_descendants(self, space_dict):
        assert list(Space.from_dict(space_dict("a.rs")).walk()) == []


class TestCheckRunSession:
    def test_ingest_collects_records_and_annotations(self, nested_line):
        session = CheckRunSession(version="0.0.25")
        assert session.ingest(nested_line) is not None
        assert session.ingest("Skipping file foo.txt") is None
        assert len(session.records) == 1
        assert len(session.annotations) == 4

    def test_started_at_is_iso_utc(self):
        assert CheckRunSession().started_at.endswith("Z")

    def test_report_uses_session_version(self, space_dict):
        session = CheckRunSession(version="9.9.9")
        session.ingest(json.dumps(space_dict("a.rs")))
        assert "| rust-code-analysis-cli | 9.9.9 |" in session.report()
