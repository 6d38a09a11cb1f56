import abc
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from conform.checks.base import Issue


@dataclass(frozen=True)
class Options:
    """
    Options passed to every policy when it is enforced.
    """
    root: Path = Path(".")


class Check(abc.ABC):
    """
    A single named check within a policy report.
    """
    @abc.abstractmethod
    def name(self) -> str:
        raise NotImplementedError()

    @abc.abstractmethod
    def message(self) -> str:
        raise NotImplementedError()

    @abc.abstractmethod
    def errors(self) -> List[Issue]:
        raise NotImplementedError()


@dataclass
class Report:
    """
    Results of enforcing a policy: one entry per check that was run.
    """
    checks: List[Check] = field(default_factory=list)

    def add_check(self, check: Check) -> None:
        self.checks.append(check)

    def valid(self) -> bool:
        return all(not check.errors() for check in self.checks)


class Policy(abc.ABC):
    @abc.abstractmethod
    def compliance(self, options: Options) -> Report:
        raise NotImplementedError()
