"""STIG version diff.

Compares two STIGs rule by rule, keyed on ``stig_id``. This is a content
diff: only title, severity, description, check text and fix text are
compared; review state (status, finding details, comments) and the rule's
CCI, group and rule identifiers are ignored.

Duplicate ``stig_id`` values within one STIG are last-write-wins when
indexing and are not reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from stig_viewer.core.constants import DIFF_FIELDS
from stig_viewer.models.stig import Rule, Stig, wire_name


@dataclass(frozen=True)
class ChangedEntry:
    """A rule present in both STIGs whose content differs."""

    stig_id: str
    rule_id: str
    fields: Tuple[str, ...]
    a: Dict[str, Any] = field(default_factory=dict)
    b: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        """JSON shape with camelCase field names."""

        def plain(values: Dict[str, Any]) -> Dict[str, Any]:
            return {wire_name(k): getattr(v, "value", v) for k, v in values.items()}

        return {
            "stigId": self.stig_id,
            "ruleId": self.rule_id,
            "fields": [wire_name(f) for f in self.fields],
            "a": plain(self.a),
            "b": plain(self.b),
        }


@dataclass(frozen=True)
class DiffResult:
    """Rules added in B, removed from A, and changed between them."""

    added: Tuple[Rule, ...] = ()
    removed: Tuple[Rule, ...] = ()
    changed: Tuple[ChangedEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)

    def summary(self) -> Dict[str, int]:
        return {
            "added": len(self.added),
            "removed": len(self.removed),
            "changed": len(self.changed),
        }

    def as_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary(),
            "added": [rule.as_dict() for rule in self.added],
            "removed": [rule.as_dict() for rule in self.removed],
            "changed": [entry.as_dict() for entry in self.changed],
        }


def _index(stig: Stig) -> Dict[str, Rule]:
    index: Dict[str, Rule] = {}
    for rule in stig.rules:
        index[rule.stig_id] = rule
    return index


def changed_fields(rule_a: Rule, rule_b: Rule) -> Tuple[str, ...]:
    """Names of the compared fields whose values differ."""
    return tuple(f for f in DIFF_FIELDS if getattr(rule_a, f) != getattr(rule_b, f))


def diff_stigs(stig_a: Stig, stig_b: Stig) -> DiffResult:
    """
    Compare baseline ``stig_a`` with ``stig_b``.

    Args:
        stig_a: Baseline (older) STIG
        stig_b: Comparison (newer) STIG

    Returns:
        ``added`` in B's rule order, ``removed`` and ``changed`` in A's
    """
    map_a = _index(stig_a)
    map_b = _index(stig_b)

    added = tuple(rule for stig_id, rule in map_b.items() if stig_id not in map_a)

    removed = []
    changed = []
    for stig_id, rule_a in map_a.items():
        rule_b = map_b.get(stig_id)
        if rule_b is None:
            removed.append(rule_a)
            continue
        diff = changed_fields(rule_a, rule_b)
        if diff:
            changed.append(ChangedEntry(
                stig_id=stig_id,
                rule_id=rule_a.id,
                fields=diff,
                a={f: getattr(rule_a, f) for f in diff},
                b={f: getattr(rule_b, f) for f in diff},
            ))

    return DiffResult(added=added, removed=tuple(removed), changed=tuple(changed))
