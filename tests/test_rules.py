from dataclasses import replace
from datetime import UTC, datetime

import pytest

from jira_readiness.analysis import RULES, CheckResult, CheckStatus, analyze_issue, check_issue
from jira_readiness.core.collection import IssueCollection
from jira_readiness.core.models import (
    CommentModel,
    IssueApprovals,
    IssueModel,
    IssuePlanning,
    IssueReadiness,
)


def _comment(body):
    ts = datetime(2024, 6, 1, tzinfo=UTC)
    return CommentModel(author="alice", created=ts, updated=ts, body=body)


def _story(key="OCP-1", status="In Progress", **kw):
    kw.setdefault("components", ["Net"])
    kw.setdefault("story_points", 3)
    kw.setdefault("epic_link", "OCP-100")
    return IssueModel(key, "Story", status, **kw)


def _clean_epic(**overrides):
    epic = IssueModel(
        "OCP-100",
        "Epic",
        "In Progress",
        summary="Clean epic",
        description="Deliver the thing",
        priority="Major",
        owner="bob",
        qe_assignee="carol",
        acceptance="It works",
        design_doc="https://docs.example.com/design",
        components=["Net"],
        fix_versions=["4.16"],
        comments=[_comment("GREEN: on track")],
        approvals=IssueApprovals(True, True, True, True, True),
        readiness=IssueReadiness(True, True, True, True, True, True),
        market_problem=IssueModel("OCP-1000", "Initiative", "New"),
        linked_issues=IssueCollection([_story()]),
    )
    return replace(epic, **overrides)


def _check(issue, component=None):
    return check_issue(analyze_issue(issue, component))


def test_clean_epic_is_ready_and_green():
    r = _check(_clean_epic())
    assert r.ready is True
    assert r.status == CheckStatus.GREEN
    assert r.messages == []


def test_obsolete_short_circuit():
    epic = _clean_epic(status="Obsolete", fix_versions=[], description="", owner=None, priority=None)
    r = _check(epic)
    assert r.ready is True
    assert r.status == CheckStatus.NONE
    assert r.messages == ["OBSOLETE"]


def test_no_children():
    r = _check(_clean_epic(linked_issues=IssueCollection()))
    assert r.ready is False
    assert "NOSTORIES" in r.messages


@pytest.mark.parametrize(
    ("overrides", "message", "ready", "status"),
    [
        ({"fix_versions": ["Alongside 4.16"]}, "ALONGSIDE", True, CheckStatus.GREEN),
        ({"fix_versions": []}, "NOVERSION", False, CheckStatus.GREEN),
        ({"fix_versions": ["4.16", "4.17"]}, "MULTIVERSION", True, CheckStatus.GREEN),
        ({"description": ""}, "NODESCRIPTION", False, CheckStatus.GREEN),
        ({"readiness": IssueReadiness(True, True, True, True, True, False)}, "NOTREADY", False, CheckStatus.GREEN),
        ({"approvals": IssueApprovals(True, False, True, True, True)}, "NOACKS", True, CheckStatus.RED),
        ({"owner": None}, "NODELIVERYOWNER", False, CheckStatus.RED),
        ({"qe_assignee": ""}, "NOQEASSIGNEE", False, CheckStatus.RED),
        ({"planning": IssuePlanning(no_quality=True)}, "NOQEMISMATCH", False, CheckStatus.GREEN),
        ({"acceptance": None}, "NOCRITERIA", False, CheckStatus.RED),
        ({"priority": None}, "NOPRIORITY", False, CheckStatus.RED),
        ({"priority": "Unprioritized"}, "NOPRIORITY", False, CheckStatus.RED),
        ({"status": "New"}, "NOTSTARTED", True, CheckStatus.YELLOW),
        ({"impediment": True}, "IMPEDIMENT", True, CheckStatus.RED),
        ({"market_problem": None}, "NOMARKETPROBLEM", False, CheckStatus.GREEN),
        ({"comments": []}, "NOSTATUSCOMMENT", True, CheckStatus.NONE),
        ({"design_doc": None}, "NODESIGN", False, CheckStatus.GREEN),
    ],
)
def test_single_rule(overrides, message, ready, status):
    r = _check(_clean_epic(**overrides))
    assert r.messages == [message]
    assert r.ready is ready
    assert r.status == status


def test_no_quality_without_qe_assignee_is_clean():
    r = _check(_clean_epic(planning=IssuePlanning(no_quality=True), qe_assignee=None))
    assert r.messages == []
    assert r.ready is True


def test_no_feature_skips_design_doc():
    r = _check(_clean_epic(planning=IssuePlanning(no_feature=True), design_doc=None))
    assert "NODESIGN" not in r.messages


def test_linked_impediment_ignores_obsolete_issues():
    impeded = _story("OCP-2", impediment=True)
    r = _check(_clean_epic(linked_issues=IssueCollection([_story(), impeded])))
    assert "IMPEDIMENT" in r.messages
    assert r.status == CheckStatus.RED

    obsolete = _story("OCP-3", status="Obsolete", impediment=True)
    r = _check(_clean_epic(linked_issues=IssueCollection([_story(), obsolete])))
    assert "IMPEDIMENT" not in r.messages


def test_issue_without_component():
    orphan = _story("OCP-2", components=[])
    r = _check(_clean_epic(linked_issues=IssueCollection([_story(), orphan])))
    assert r.messages == ["ISSUENOCOMPONENT"]
    assert r.ready is False


def test_multi_component():
    r = _check(_clean_epic(components=["Net", "UI"]), "Net")
    assert "MULTICOMPONENT" in r.messages
    assert r.ready is False
    assert r.status >= CheckStatus.YELLOW


def test_single_component_scope_is_clean():
    r = _check(_clean_epic(), "Net")
    assert r.messages == []


def test_clean_done():
    done = _story(status="Done", resolution="Done")
    r = _check(_clean_epic(status="Done", comments=[], linked_issues=IssueCollection([done])))
    assert r.status == CheckStatus.GREEN
    assert "NOTDONE" not in r.messages
    assert r.messages == ["NOSTATUSCOMMENT"]


def test_incomplete_done():
    open_story = _story(status="In Progress")
    r = _check(_clean_epic(status="Done", linked_issues=IssueCollection([open_story])))
    assert r.status == CheckStatus.RED
    assert "NOTDONE" in r.messages


def test_done_with_incomplete_points():
    stories = [
        _story("OCP-1", status="Done", resolution="Done", story_points=3),
        _story("OCP-2", status="Done", resolution="Won't Do", story_points=0),
    ]
    r = _check(_clean_epic(status="Done", linked_issues=IssueCollection(stories)))
    # issues 1/2 complete
    assert "NOTDONE" in r.messages


def test_done_green_does_not_lower_status():
    done = _story(status="Done", resolution="Done")
    r = _check(_clean_epic(status="Done", priority=None, linked_issues=IssueCollection([done])))
    assert r.status == CheckStatus.RED
    assert r.messages == ["NOPRIORITY"]


def test_active_epic_without_started_stories():
    todo = _story(status="To Do")
    r = _check(_clean_epic(linked_issues=IssueCollection([todo])))
    assert r.messages == ["NOACTIVESTORIES"]
    assert r.status == CheckStatus.RED
    assert r.ready is True


def test_started_stories_respects_component_scope():
    stories = [_story("OCP-1", status="To Do"), _story("OCP-2", status="In Progress", components=["UI"])]
    r = _check(_clean_epic(linked_issues=IssueCollection(stories)), "Net")
    assert "NOACTIVESTORIES" in r.messages
    r = _check(_clean_epic(linked_issues=IssueCollection(stories)))
    assert "NOACTIVESTORIES" not in r.messages


def test_story_without_epic_link():
    story = _story("OCP-7", epic_link=None, fix_versions=["4.16"], description="d", owner="o", qe_assignee="q")
    story = replace(story, acceptance="a", priority="Major", design_doc="x", comments=[_comment("YELLOW: hmm")])
    r = _check(story)
    assert r.messages == ["NOEPIC"]
    assert r.ready is False
    assert r.status == CheckStatus.YELLOW


def test_status_comment_merges_into_status():
    r = _check(_clean_epic(comments=[_comment("RED: stuck")]))
    assert r.status == CheckStatus.RED
    assert r.messages == []


def test_messages_follow_rule_order():
    epic = _clean_epic(
        fix_versions=[],
        description="",
        owner=None,
        priority="Unprioritized",
        design_doc=None,
        comments=[],
    )
    r = _check(epic)
    assert r.messages == ["NOVERSION", "NODESCRIPTION", "NODELIVERYOWNER", "NOPRIORITY", "NOSTATUSCOMMENT", "NODESIGN"]


def test_rule_codes_are_unique_and_ordered():
    codes = [rule.code for rule in RULES if rule.code]
    assert len(codes) == len(set(codes))
    assert codes[0] == "ALONGSIDE"
    assert codes[-1] == "NODESIGN"


def test_monotonic_merge_per_rule():
    a = analyze_issue(
        _clean_epic(
            priority=None,
            status="New",
            comments=[_comment("GREEN: fine")],
            linked_issues=IssueCollection(),
        )
    )
    result = CheckResult()
    previous_ready, previous_status = result.ready, result.status
    for rule in RULES:
        rule.apply(a, result)
        assert not (result.ready and not previous_ready)
        assert result.status >= previous_status
        previous_ready, previous_status = result.ready, result.status
    assert result.status == CheckStatus.RED


def test_check_is_idempotent():
    epic = _clean_epic(priority=None, components=["Net", "UI"])
    first = _check(epic, "Net")
    second = _check(epic, "Net")
    assert first == second
    assert first is not second


def test_check_result_merges():
    r = CheckResult()
    r.set_status(CheckStatus.RED).set_status(CheckStatus.GREEN).set_ready(False).set_ready(True)
    assert r.status == CheckStatus.RED
    assert r.ready is False
    assert str(r.status) == "RED"
    r.add_message("B").add_message("A")
    assert r.messages_string() == "B,A"
