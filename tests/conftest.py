"""Shared test fixtures for rca-check tests."""

import json
from typing import Any, Dict, List, Optional

import pytest

from rca_check.github.models import CheckRunCreate, CheckRunUpdate


def _metrics(**overrides) -> Dict[str, Any]:
    metrics: Dict[str, Any] = {
        "nargs": 0,
        "nexits": 0,
        "cognitive": 0,
        "cyclomatic": {"sum": 1.0, "average": 1.0},
        "halstead": {
            "n1": 3.0,
            "N1": 4.0,
            "n2": 2.0,
            "N2": 2.0,
            "length": 6.0,
            "estimated_program_length": 6.754887502163468,
            "purity_ratio": 1.1258145836939113,
            "vocabulary": 5.0,
            "volume": 13.931568569324174,
            "difficulty": 1.5,
            "level": 0.6666666666666666,
            "effort": 20.89735285398626,
            "time": 1.1609640474436812,
            "bugs": 0.0025368652753261814,
        },
        "loc": {"sloc": 3.0, "ploc": 3.0, "lloc": 1.0, "cloc": 0.0, "blank": 0.0},
        "nom": {"functions": 1.0, "closures": 0.0, "total": 1.0},
        "mi": {
            "mi_original": 139.1,
            "mi_sei": 123.4,
            "mi_visual_studio": 81.345,
        },
    }
    metrics.update(overrides)
    return metrics


def _space(
    name: Optional[str],
    start_line: int = 1,
    end_line: int = 3,
    spaces: Optional[List[Dict[str, Any]]] = None,
    kind: str = "function",
    **metric_overrides,
) -> Dict[str, Any]:
    return {
        "name": name,
        "start_line": start_line,
        "end_line": end_line,
        "kind": kind,
        "spaces": spaces or [],
        "metrics": _metrics(**metric_overrides),
    }


@pytest.fixture
def metrics_dict():
    """Factory for a metrics object as printed by rust-code-analysis-cli."""
    return _metrics


@pytest.fixture
def space_dict():
    """Factory for one space-tree node as printed by rust-code-analysis-cli."""
    return _space


@pytest.fixture
def nested_file(space_dict):
    """File with two functions, the first holding a closure and an anonymous one."""
    return space_dict(
        "src/lib.rs",
        1,
        40,
        kind="unit",
        spaces=[
            space_dict(
                "parse",
                2,
                20,
                spaces=[
                    space_dict("<closure>", 5, 8, kind="closure"),
                    space_dict("<anonymous>", 10, 12, kind="closure"),
                ],
            ),
            space_dict("render", 22, 39),
        ],
    )


@pytest.fixture
def nested_line(nested_file):
    return json.dumps(nested_file)


class FakeChecksApi:
    """Records Checks API calls; can be told to fail on given calls."""

    def __init__(self, check_run_id=42, fail_create=None, fail_update_at=None, fail_cancel=None):
        self.check_run_id = check_run_id
        self.fail_create = fail_create
        self.fail_update_at = fail_update_at
        self.fail_cancel = fail_cancel
        self.creates: List[CheckRunCreate] = []
        self.updates: List[CheckRunUpdate] = []
        self.calls: List[str] = []

    def create(self, owner, repo, request):
        self.calls.append("create")
        self.creates.append(request)
        if self.fail_create is not None:
            raise self.fail_create
        return self.check_run_id

    def update(self, owner, repo, check_run_id, request):
        assert check_run_id == self.check_run_id
        self.calls.append("update")
        self.updates.append(request)
        if (
            self.fail_cancel is not None
            and request.conclusion is not None
            and request.conclusion.value == "cancelled"
        ):
            raise self.fail_cancel
        if self.fail_update_at is not None and len(self.updates) == self.fail_update_at:
            raise RuntimeError("boom")


@pytest.fixture
def fake_api():
    return FakeChecksApi
