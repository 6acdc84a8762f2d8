"""Test configuration ensuring local package takes precedence over installed copies."""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
PROJECT_STR = str(PROJECT_ROOT)
if PROJECT_STR not in sys.path:
    sys.path.insert(0, PROJECT_STR)

from pr_triage import constants, print_utils  # noqa: E402
from pr_triage.i18n import set_language  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep log, preferences and language out of the real home directory."""
    cfg_dir = tmp_path / "cfg"
    monkeypatch.setattr(constants, "CONFIG_DIR", str(cfg_dir))
    monkeypatch.setattr(constants, "LOG_FILE", str(cfg_dir / "pr-triage.log"))
    monkeypatch.setattr(constants, "PREFERENCES_FILE", str(cfg_dir / "preferences.json"))
    monkeypatch.setenv(constants.LANG_ENV_VAR, "en")
    monkeypatch.delenv(constants.TOKEN_ENV_VAR, raising=False)
    monkeypatch.setattr(print_utils, "VERBOSE", False)
    set_language("en")
    yield cfg_dir
    set_language("en")


def pull_request_node(
    pr_id="PR_kwDOAbc123",
    author=None,
    reviewers=None,
    number=42,
    title="Fix the frobnicator",
):
    if author is None:
        author = {"__typename": "User", "id": "U_author", "login": "alice"}
    if reviewers is None:
        reviewers = [{"isAuthor": False, "isCommenter": True, "reviewer": {"id": "U_reviewer", "login": "bob"}}]
    return {
        "id": pr_id,
        "number": number,
        "title": title,
        "author": author,
        "suggestedReviewers": reviewers,
    }


def last_pull_request_body(nodes=None, errors=None, data=True):
    body = {}
    if data:
        if nodes is None:
            nodes = [pull_request_node()]
        body["data"] = {"repository": {"pullRequests": {"nodes": nodes}}}
    if errors is not None:
        body["errors"] = errors
    return json.dumps(body).encode("utf-8")


def assign_author_body(pr_id="PR_kwDOAbc123", assignee="U_author"):
    return json.dumps({
        "data": {
            "addAssigneesToAssignable": {
                "clientMutationId": None,
                "assignable": {
                    "__typename": "PullRequest",
                    "id": pr_id,
                    "assignees": {"nodes": [{"id": assignee, "login": "alice"}]},
                },
            }
        }
    }).encode("utf-8")


def request_reviews_body(pr_id="PR_kwDOAbc123"):
    return json.dumps({
        "data": {
            "requestReviews": {
                "clientMutationId": None,
                "pullRequest": {"id": pr_id, "reviewRequests": {"totalCount": 1}},
            }
        }
    }).encode("utf-8")


class FakeTransport:
    """Replays canned response bodies and records the documents it was sent."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.documents = []

    def request(self, document):
        self.documents.append(document)
        if not self.responses:
            raise AssertionError(f"unexpected request: {document.operation_name}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_transport():
    return FakeTransport
