from datetime import UTC, datetime

from jira_readiness.analysis import CheckStatus, analyze_issue, issue_comment_status
from jira_readiness.core.collection import IssueCollection, Progress
from jira_readiness.core.models import CommentModel, IssueModel


def _comment(body, day):
    ts = datetime(2024, 5, day, 12, 0, tzinfo=UTC)
    return CommentModel(author="alice", created=ts, updated=ts, body=body)


def _epic(linked=(), **kw):
    kw.setdefault("components", ["Net"])
    return IssueModel("OCP-100", "Epic", kw.pop("status", "In Progress"), linked_issues=IssueCollection(linked), **kw)


def _linked():
    return [
        IssueModel("OCP-1", "Story", "Done", resolution="Done", story_points=3, components=["Net"]),
        IssueModel("OCP-2", "Story", "In Progress", story_points=5, components=["UI"]),
        IssueModel("OCP-3", "Task", "To Do", components=["Net"]),
        IssueModel("OCP-4", "Story", "Obsolete", components=[]),
        IssueModel("OCP-5", "Bug", "To Do", components=["Net"]),
    ]


def test_analysis_without_component():
    a = analyze_issue(_epic(_linked()))
    assert a.component is None
    assert a.all_linked_issues.keys == ["OCP-1", "OCP-2", "OCP-3", "OCP-5"]
    assert a.linked_issues == a.all_linked_issues
    assert a.issues_completion == Progress(completed=1, total=4)
    assert a.points_completion == Progress(completed=3, total=8)
    assert a.num_activities == 4
    assert a.issue_no_component is False


def test_analysis_scoped_by_component():
    a = analyze_issue(_epic(_linked()), "Net")
    assert a.component == "Net"
    assert a.linked_issues.keys == ["OCP-1", "OCP-3", "OCP-5"]
    assert a.issues_completion == Progress(completed=1, total=3)
    assert a.points_completion == Progress(completed=3, total=3)
    assert a.num_activities == 3


def test_empty_component_means_no_scoping():
    a = analyze_issue(_epic(_linked()), "")
    assert a.component is None
    assert len(a.linked_issues) == 4


def test_issue_no_component_only_for_same_project():
    other_project = IssueModel("RHEL-9", "Story", "To Do")
    a = analyze_issue(_epic([other_project]))
    assert a.issue_no_component is False

    same_project = IssueModel("OCP-9", "Story", "To Do")
    a = analyze_issue(_epic([same_project]))
    assert a.issue_no_component is True


def test_issue_no_component_uses_unscoped_issues():
    a = analyze_issue(_epic([IssueModel("OCP-9", "Story", "To Do")]), "Net")
    assert len(a.linked_issues) == 0
    assert a.issue_no_component is True


def test_only_initiatives_are_not_activities():
    a = analyze_issue(_epic([IssueModel("OCP-9", "Initiative", "To Do", components=["Net"])]))
    assert a.num_activities == 0


def test_comment_precedence_newest_wins():
    issue = IssueModel("OCP-1", "Story", "To Do", comments=[_comment("RED: blocked", 1), _comment("GREEN: fine", 2)])
    status, date = issue_comment_status(issue)
    assert status == CheckStatus.GREEN
    assert date == datetime(2024, 5, 2, 12, 0, tzinfo=UTC)


def test_comment_without_prefix_is_skipped():
    issue = IssueModel(
        "OCP-1",
        "Story",
        "To Do",
        comments=[_comment("YELLOW: slipping", 1), _comment("just chatting", 3), _comment("green: lowercase", 4)],
    )
    status, date = issue_comment_status(issue)
    assert status == CheckStatus.YELLOW
    assert date.day == 1


def test_no_status_comment():
    assert issue_comment_status(IssueModel("OCP-1", "Story", "To Do")) == (CheckStatus.NONE, None)


def test_comment_status_keeps_highest_severity_across_scope():
    linked = [
        IssueModel("OCP-1", "Story", "To Do", components=["Net"], comments=[_comment("YELLOW: a", 1)]),
        IssueModel("OCP-2", "Story", "To Do", components=["Net"], comments=[_comment("RED: b", 2)]),
    ]
    a = analyze_issue(_epic(linked, comments=[_comment("GREEN: c", 3)]))
    assert a.comment_status == CheckStatus.RED
    assert a.comment_date.day == 2


def test_comment_status_ties_keep_first_issue():
    linked = [
        IssueModel("OCP-1", "Story", "To Do", components=["Net"], comments=[_comment("YELLOW: first", 5)]),
        IssueModel("OCP-2", "Story", "To Do", components=["Net"], comments=[_comment("YELLOW: second", 9)]),
    ]
    a = analyze_issue(_epic(linked, comments=[_comment("YELLOW: epic", 10)]))
    assert a.comment_status == CheckStatus.YELLOW
    assert a.comment_date.day == 5


def test_comment_scan_ignores_out_of_scope_issues():
    linked = [IssueModel("OCP-1", "Story", "To Do", components=["UI"], comments=[_comment("RED: ui", 1)])]
    a = analyze_issue(_epic(linked, comments=[_comment("GREEN: epic", 2)]), "Net")
    assert a.comment_status == CheckStatus.GREEN


def test_analysis_does_not_mutate_input():
    epic = _epic(_linked())
    before = list(epic.linked_issues.keys)
    analyze_issue(epic, "Net")
    assert epic.linked_issues.keys == before
