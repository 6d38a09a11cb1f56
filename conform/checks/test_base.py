from pathlib import Path

import pytest

from conform.checks.base import Issue, IssueList, IssueType

E_EXAMPLE = IssueType("adc9a659-946e-4ac5-a518-e41acc89f9c8", "File {path} is {state}")


def test_issue_type_requires_uuid():
    with pytest.raises(ValueError, match="Invalid UUID"):
        IssueType("not-a-uuid", "message")


def test_issue_message_uses_data_and_path():
    issue = E_EXAMPLE.at(Path("src") / "a.go", state="broken")
    assert issue.path == Path("src/a.go")
    assert issue.message == "File src/a.go is broken"
    assert str(issue) == issue.message


def test_issue_at_cannot_move():
    issue = E_EXAMPLE.make(state="x").at(Path("a"))
    assert issue.at(Path("a")) == issue
    with pytest.raises(ValueError):
        issue.at(Path("b"))


def test_issue_list_keeps_order_and_duplicates():
    issues = IssueList()
    first = E_EXAMPLE.at(Path("a"), state="x")
    issues.append(first)
    issues.append(first)
    issues.append(E_EXAMPLE.at(Path("b"), state="x"))
    assert len(issues) == 3
    assert [i.path.name for i in issues] == ["a", "a", "b"]
