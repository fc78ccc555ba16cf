"""Check verdict accumulator: readiness flag, severity status, and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class CheckStatus(IntEnum):
    """Ordinal risk level, merged by keeping the highest ever observed."""

    NONE = 0  # unknown
    GREEN = 1  # no impediment, confident to deliver in time
    YELLOW = 2  # minor impediments putting the delivery at risk
    RED = 3  # major roadblocks, delivery in time not possible

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True)
class CheckResult:
    """Verdict for a single epic.

    ``ready`` can only go from True to False and ``status`` can only increase,
    so the final value does not depend on the order checks are applied in.
    ``messages`` keeps the evaluation order.
    """

    ready: bool = True
    status: CheckStatus = CheckStatus.NONE
    messages: list[str] = field(default_factory=list)

    def set_ready(self, ready: bool) -> CheckResult:
        self.ready = self.ready and ready
        return self

    def set_status(self, status: CheckStatus) -> CheckResult:
        if status > self.status:
            self.status = CheckStatus(status)
        return self

    def add_message(self, message: str) -> CheckResult:
        self.messages.append(message)
        return self

    def messages_string(self, sep: str = ",") -> str:
        return sep.join(self.messages)
