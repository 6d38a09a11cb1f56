from typing import Any, Iterator, List, Mapping
from dataclasses import dataclass, field
from pathlib import Path
import uuid


@dataclass(frozen=True)
class IssueType:
    """
    Represents a type of issue. The message is a format string filled in
    from the issue data.
    """
    id: str
    message: str

    def __post_init__(self):
        # Verify that the ID is a valid UUID
        if not isinstance(self.id, str):
            raise ValueError(f"Invalid ID: {self.id}")
        try:
            uuid.UUID(self.id)
        except ValueError:
            raise ValueError(f"Invalid UUID: {self.id}")

    def make(self, **kwargs) -> 'Issue':
        """
        Creates an Issue of this type.
        """
        return Issue(self, data=kwargs)

    def at(self, path: Path, **kwargs) -> 'Issue':
        """
        Returns an Issue with the specified path.
        """
        return Issue(self, data=kwargs).at(path)


@dataclass(frozen=True)
class Issue:
    """
    Represents an issue found during a check.
    """
    issue_type: IssueType
    data: Mapping[str, Any] | None = None
    path: Path | None = None

    def at(self, path: Path) -> 'Issue':
        """
        Returns a copy of the issue located at the specified path.
        """
        if self.path is not None and self.path != path:
            raise ValueError("Cannot change the path of an existing issue.")
        return Issue(self.issue_type, self.data, path)

    @property
    def message(self) -> str:
        data = dict(self.data or {})
        if self.path is not None:
            data.setdefault("path", self.path.as_posix())
        return self.issue_type.message.format(**data)

    def __str__(self) -> str:
        return self.message


@dataclass
class IssueList:
    """
    Ordered list of issues found during a check.
    """
    issues: List[Issue] = field(default_factory=list)

    def append(self, issue: Issue) -> None:
        assert isinstance(issue, Issue), f"Expected Issue, got {type(issue)}"
        self.issues.append(issue)

    def __iter__(self) -> Iterator[Issue]:
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)
