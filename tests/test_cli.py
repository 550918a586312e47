from __future__ import annotations

import json

import pytest

from summary_issues import cli
from summary_issues.errors import QueryError
from summary_issues.models import Issue, LabelSet

BUG_SUMMARY_QUERY = 'is:open user:acme label:summary label:"bug"'


@pytest.fixture
def actions_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    event_path = tmp_path / "event.json"
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/widgets")
    monkeypatch.setenv("GITHUB_EVENT_NAME", "issues")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_path))
    monkeypatch.setenv("GITHUB_TOKEN", "tkn")
    monkeypatch.delenv("GITHUB_SERVER_URL", raising=False)
    monkeypatch.delenv("GITHUB_GRAPHQL_URL", raising=False)
    return event_path


def _write_labeled_event(path, label: str = "bug") -> None:
    path.write_text(
        json.dumps(
            {
                "action": "labeled",
                "label": {"name": label},
                "issue": {"node_id": "I1", "title": "Crash", "labels": [{"name": label}]},
            }
        )
    )


def test_main_regenerates_matching_summary_issues(actions_env, tracker_factory, monkeypatch, tmp_path):
    _write_labeled_event(actions_env)
    summary = Issue(id="S1", title="Bugs", labels=LabelSet.of("summary", "bug"))
    tracker = tracker_factory(summary_results={BUG_SUMMARY_QUERY: [summary]})
    monkeypatch.setattr(cli, "_build_tracker", lambda cfg: tracker)
    out = tmp_path / "out" / "result.json"

    rc = cli.main(["-summaryCommentRegex", "^Status", "--summary-json", str(out)])

    assert rc == 0
    assert [issue_id for issue_id, _ in tracker.updates] == ["S1"]
    assert "matches the regular expression `^Status`" in tracker.updates[0][1]
    assert json.loads(out.read_text())["updated"] == ["S1"]


def test_main_dry_run_does_not_write(actions_env, tracker_factory, monkeypatch):
    _write_labeled_event(actions_env)
    summary = Issue(id="S1", title="Bugs", labels=LabelSet.of("summary", "bug"))
    tracker = tracker_factory(summary_results={BUG_SUMMARY_QUERY: [summary]})
    monkeypatch.setattr(cli, "_build_tracker", lambda cfg: tracker)

    assert cli.main(["--dry-run"]) == 0
    assert tracker.updates == []


def test_main_schedule_event_is_successful_noop(actions_env, tracker_factory, monkeypatch):
    actions_env.write_text(json.dumps({"schedule": "0 0 * * *"}))
    monkeypatch.setenv("GITHUB_EVENT_NAME", "schedule")
    tracker = tracker_factory()
    monkeypatch.setattr(cli, "_build_tracker", lambda cfg: tracker)

    assert cli.main([]) == 0
    assert tracker.calls == []


def test_main_reports_config_errors_on_stderr(actions_env, capsys):
    _write_labeled_event(actions_env)

    rc = cli.main(["--summary-comment-regex", "(unclosed"])

    assert rc == 1
    assert "invalid summary comment regex" in capsys.readouterr().err


def test_main_reports_invalid_repository(actions_env, monkeypatch, capsys):
    monkeypatch.setenv("GITHUB_REPOSITORY", "no-slash")

    assert cli.main([]) == 1
    assert "invalid value for GITHUB_REPOSITORY" in capsys.readouterr().err


def test_main_propagates_api_errors_as_exit_code(actions_env, monkeypatch, capsys):
    _write_labeled_event(actions_env)

    class _FailingTracker:
        def search_summary_issues(self, query: str) -> list[Issue]:
            raise QueryError("graphql error: Resource not accessible by integration")

    monkeypatch.setattr(cli, "_build_tracker", lambda cfg: _FailingTracker())

    assert cli.main([]) == 1
    assert "Resource not accessible by integration" in capsys.readouterr().err


def test_main_accepts_double_dash_camel_case_regex_flag(actions_env, tracker_factory, monkeypatch):
    _write_labeled_event(actions_env)
    summary = Issue(id="S1", title="Bugs", labels=LabelSet.of("summary", "bug"))
    tracker = tracker_factory(summary_results={BUG_SUMMARY_QUERY: [summary]})
    monkeypatch.setattr(cli, "_build_tracker", lambda cfg: tracker)

    assert cli.main(["--summaryCommentRegex", "^Status"]) == 0
    assert "matches the regular expression `^Status`" in tracker.updates[0][1]


def test_main_reports_unreadable_config_file(actions_env, tmp_path, capsys):
    _write_labeled_event(actions_env)

    assert cli.main(["--config", str(tmp_path)]) == 1
    assert "unable to read configuration file" in capsys.readouterr().err
