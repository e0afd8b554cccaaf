"""Errors raised while building or tuning a layout rule table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union


@dataclass(frozen=True, slots=True)
class RuleIssue:
    """One problem found in a rule table, tied to a rule id when known."""

    message: str
    rule_id: Optional[str] = None

    def __str__(self) -> str:
        if self.rule_id:
            return f"rule '{self.rule_id}': {self.message}"
        return self.message


class RuleConfigurationError(ValueError):
    """Raised when a rule table or a tuning file is invalid.

    ``issues`` lists every problem found, not just the first, so a tuning
    file can be fixed in one pass. ``source`` names the tuning file when the
    table came from one.
    """

    def __init__(
        self,
        issues: Iterable[Union[RuleIssue, str]],
        source: Optional[str] = None,
    ) -> None:
        self.issues: List[RuleIssue] = [
            issue if isinstance(issue, RuleIssue) else RuleIssue(str(issue))
            for issue in issues
        ]
        self.source = source
        super().__init__(self._describe())

    @property
    def rule_ids(self) -> List[str]:
        """Ids of the offending rules, in the order they were reported."""

        seen: Dict[str, None] = {}
        for issue in self.issues:
            if issue.rule_id:
                seen.setdefault(issue.rule_id, None)
        return list(seen)

    def _describe(self) -> str:
        where = f" in {self.source}" if self.source else ""
        if not self.issues:
            return f"Invalid layout rule configuration{where}"
        header = f"Invalid layout rule configuration{where} ({len(self.issues)} issue(s)):"
        return "\n".join([header, *(f"  {issue}" for issue in self.issues)])
