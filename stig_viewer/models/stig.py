"""Canonical STIG document model.

``Stig`` and ``Rule`` are the shapes every parser produces and every
serializer, exporter and diff consumes. Both are frozen: updates go through
``dataclasses.replace`` (see ``stig_viewer.processor.review``) and yield new
values.

Thread-safe: Yes (immutable after creation)
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from stig_viewer.core.constants import Severity, Status

# Python attribute name -> wire (JSON) name
_RULE_WIRE_NAMES: Dict[str, str] = {
    "id": "id",
    "stig_id": "stigId",
    "group_id": "groupId",
    "title": "title",
    "description": "description",
    "check_text": "checkText",
    "fix_text": "fixText",
    "severity": "severity",
    "cci_ids": "cciIds",
    "status": "status",
    "finding_details": "findingDetails",
    "comments": "comments",
}


def wire_name(attr: str) -> str:
    """Return the camelCase JSON name for a ``Rule`` attribute."""
    return _RULE_WIRE_NAMES.get(attr, attr)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Rule:
    """One checklist item.

    ``severity`` and ``status`` are coerced into their closed enumerations
    on construction (CAT II / not_reviewed for anything unrecognized), and
    ``cci_ids`` is always a tuple.
    """

    id: str
    stig_id: str
    group_id: str = ""
    title: str = ""
    description: str = ""
    check_text: str = ""
    fix_text: str = ""
    severity: Severity = Severity.CAT_II
    cci_ids: Tuple[str, ...] = ()
    status: Status = Status.NOT_REVIEWED
    finding_details: str = ""
    comments: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity.coerce(self.severity))
        object.__setattr__(self, "status", Status.coerce(self.status))
        object.__setattr__(self, "cci_ids", tuple(self.cci_ids or ()))

    def evolve(self, **changes: Any) -> "Rule":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase JSON payload shape."""
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in ("severity", "status"):
                value = value.value
            elif f.name == "cci_ids":
                value = list(value)
            data[wire_name(f.name)] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Rule":
        """Build a rule from a camelCase (or snake_case) mapping."""
        kwargs: Dict[str, Any] = {}
        for attr, wire in _RULE_WIRE_NAMES.items():
            if wire in data:
                kwargs[attr] = data[wire]
            elif attr in data:
                kwargs[attr] = data[attr]
        kwargs.setdefault("id", "")
        kwargs.setdefault("stig_id", "")
        for attr in ("id", "stig_id", "group_id", "title", "description",
                     "check_text", "fix_text", "finding_details", "comments"):
            if attr in kwargs:
                kwargs[attr] = _text(kwargs[attr])
        if "cci_ids" in kwargs:
            kwargs["cci_ids"] = tuple(_text(c) for c in kwargs["cci_ids"] or ())
        return cls(**kwargs)


@dataclass(frozen=True)
class Stig:
    """One checklist document."""

    title: str
    description: str = ""
    version: str = ""
    release_info: str = ""
    rules: Tuple[Rule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

    def with_rules(self, rules: Iterable[Rule]) -> "Stig":
        """Return a copy carrying ``rules``."""
        return replace(self, rules=tuple(rules))

    def find_rule(self, rule_id: str) -> Optional[Rule]:
        """First rule whose ``id`` equals ``rule_id``."""
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "version": self.version,
            "releaseInfo": self.release_info,
            "rules": [rule.as_dict() for rule in self.rules],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Stig":
        """Build a STIG from the catalog backend's JSON payload."""
        release = data.get("releaseInfo", data.get("release_info", ""))
        return cls(
            title=_text(data.get("title", "")),
            description=_text(data.get("description", "")),
            version=_text(data.get("version", "")),
            release_info=_text(release),
            rules=tuple(Rule.from_dict(r) for r in data.get("rules") or ()),
        )


@dataclass(frozen=True)
class AssetInfo:
    """Per-session asset metadata written into CKL and POAM exports."""

    hostname: str = ""
    ip: str = ""
    mac: str = ""
    fqdn: str = ""

    def as_dict(self) -> Dict[str, str]:
        return {"hostname": self.hostname, "ip": self.ip, "mac": self.mac, "fqdn": self.fqdn}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetInfo":
        return cls(**{k: _text(data.get(k, "")) for k in ("hostname", "ip", "mac", "fqdn")})
