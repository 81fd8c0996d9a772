"""Tests for reading the workflow context."""

import json

import pytest

from rca_check.context import ActionContext
from rca_check.exceptions import ConfigurationError


class TestActionContext:
    def test_push_event(self):
        ctx = ActionContext.from_env({"GITHUB_REPOSITORY": "octo/widgets", "GITHUB_SHA": "abc"})
        assert (ctx.owner, ctx.repo, ctx.sha) == ("octo", "widgets", "abc")
        assert ctx.is_fork is False

    def test_pull_request_uses_head_sha(self, tmp_path):
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"pull_request": {"head": {"sha": "head456"}}}))
        ctx = ActionContext.from_env(
            {
                "GITHUB_REPOSITORY": "octo/widgets",
                "GITHUB_SHA": "merge123",
                "GITHUB_EVENT_PATH": str(event),
                "GITHUB_HEAD_REF": "feature",
            }
        )
        assert ctx.sha == "head456"
        assert ctx.is_fork is True

    def test_empty_head_ref_is_not_a_fork(self):
        ctx = ActionContext.from_env(
            {"GITHUB_REPOSITORY": "o/r", "GITHUB_SHA": "abc", "GITHUB_HEAD_REF": ""}
        )
        assert ctx.is_fork is False

    def test_unreadable_event_falls_back_to_sha(self, tmp_path):
        ctx = ActionContext.from_env(
            {
                "GITHUB_REPOSITORY": "o/r",
                "GITHUB_SHA": "abc",
                "GITHUB_EVENT_PATH": str(tmp_path / "missing.json"),
            }
        )
        assert ctx.sha == "abc"

    @pytest.mark.parametrize(
        "env",
        [
            {"GITHUB_SHA": "abc"},
            {"GITHUB_REPOSITORY": "no-slash", "GITHUB_SHA": "abc"},
            {"GITHUB_REPOSITORY": "o/r"},
        ],
    )
    def test_missing_values(self, env):
        with pytest.raises(ConfigurationError):
            ActionContext.from_env(env)
