"""Review-session operations on a loaded STIG.

Every function here is pure: the input ``Stig`` is never modified and a
new value is returned.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

from stig_viewer.core.constants import Severity, Status
from stig_viewer.exceptions import ValidationError
from stig_viewer.models.stig import Rule, Stig

_RULE_FIELDS = frozenset(f.name for f in fields(Rule))
_SEARCH_FIELDS = ("title", "stig_id", "id", "description", "check_text", "fix_text")
_UNSAFE_NAME = re.compile(r"[^a-zA-Z0-9]")


def update_rule(stig: Stig, rule_id: str, **changes: Any) -> Stig:
    """
    Apply ``changes`` to every rule whose ``id`` equals ``rule_id``.

    Args:
        stig: Source STIG
        rule_id: Rule identifier to match
        **changes: Rule attribute values (``status="open"``, ``comments=...``)

    Returns:
        New STIG; unchanged copy when no rule matches

    Raises:
        ValidationError: If a change names an unknown rule field
    """
    unknown = sorted(set(changes) - _RULE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown rule field(s): {', '.join(unknown)}", {"rule": rule_id})
    return stig.with_rules(
        rule.evolve(**changes) if rule.id == rule_id else rule for rule in stig.rules
    )


def set_all_status(stig: Stig, status: Any) -> Stig:
    """Set every rule's status.

    Raises:
        ValidationError: If ``status`` is not a known status value
    """
    if not isinstance(status, Status):
        if not isinstance(status, str) or not Status.is_valid(status):
            raise ValidationError(f"Invalid status: {status}", {"valid": ", ".join(sorted(Status.all_values()))})
        status = Status(status)
    return stig.with_rules(rule.evolve(status=status) for rule in stig.rules)


def _matches(rule: Rule, term: str) -> bool:
    return any(term in getattr(rule, name).lower() for name in _SEARCH_FIELDS)


def filter_rules(
    stig: Stig,
    search: Optional[str] = None,
    severity: Optional[Any] = None,
    status: Optional[Any] = None,
) -> Tuple[Rule, ...]:
    """Rules matching all given filters, in document order.

    ``search`` is a case-insensitive substring match over title, STIG ID,
    rule ID, description, check text and fix text. Empty filters are
    ignored.
    """
    term = search.lower() if search else ""
    result = []
    for rule in stig.rules:
        if severity and rule.severity != severity:
            continue
        if status and rule.status != status:
            continue
        if term and not _matches(rule, term):
            continue
        result.append(rule)
    return tuple(result)


@dataclass(frozen=True)
class StigStats:
    """Review progress counters for one STIG."""

    total: int = 0
    by_severity: Dict[str, int] = field(default_factory=dict)
    by_status: Dict[str, int] = field(default_factory=dict)
    evaluated: int = 0
    pct: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "bySeverity": dict(self.by_severity),
            "byStatus": dict(self.by_status),
            "evaluated": self.evaluated,
            "pct": self.pct,
        }


def compute_stats(stig: Stig) -> StigStats:
    """Counts by severity and status, evaluated rules and percent complete."""
    by_severity = {sev.value: 0 for sev in Severity}
    by_status = {st.value: 0 for st in Status}
    for rule in stig.rules:
        by_severity[rule.severity.value] += 1
        by_status[rule.status.value] += 1

    total = len(stig.rules)
    evaluated = total - by_status[Status.NOT_REVIEWED.value]
    # round half up
    pct = int(math.floor(evaluated / total * 100 + 0.5)) if total else 0
    return StigStats(total=total, by_severity=by_severity, by_status=by_status,
                     evaluated=evaluated, pct=pct)


def export_basename(title: str) -> str:
    """File name stem for exports: non-alphanumerics become underscores."""
    return _UNSAFE_NAME.sub("_", title or "")


def ckl_filename(title: str) -> str:
    return f"{export_basename(title)}.ckl"


def poam_filename(title: str, fmt: str = "csv") -> str:
    return f"{export_basename(title)}_POAM.{fmt}"
