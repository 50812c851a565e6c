"""STIG Viewer constants module.

This module defines application constants, the closed severity and status
enumerations, and the read-only lookup tables shared by the parsers,
serializers and exporters.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple


# ──────────────────────────────────────────────────────────────────────────────
# VERSION INFORMATION
# ──────────────────────────────────────────────────────────────────────────────

VERSION = "1.0.0"
BUILD_DATE = "2026-10-18"
APP_NAME = "STIG Viewer"

MIN_PYTHON_VERSION = (3, 9)


# ──────────────────────────────────────────────────────────────────────────────
# PROCESSING LIMITS
# ──────────────────────────────────────────────────────────────────────────────

MAX_FILE_SIZE = 500 * 1024 * 1024  # 500MB maximum input file size
LARGE_FILE_THRESHOLD = 50 * 1024 * 1024  # 50MB - sample-based encoding detection
MAX_RULES = 15_000  # Warn above this many rules per checklist
MAX_RETRIES = 3
RETRY_DELAY = 0.5


# ──────────────────────────────────────────────────────────────────────────────
# CHARACTER ENCODINGS
# ──────────────────────────────────────────────────────────────────────────────

ENCODINGS = [
    "utf-8",
    "utf-8-sig",
    "utf-16",
    "cp1252",
    "latin-1",
]


# ──────────────────────────────────────────────────────────────────────────────
# ENUMERATIONS
# ──────────────────────────────────────────────────────────────────────────────


class Severity(str, Enum):
    """STIG severity categories (CAT I/II/III).

    - CAT_I = raw "high"
    - CAT_II = raw "medium" (fallback for anything unrecognized)
    - CAT_III = raw "low"
    """

    CAT_I = "CAT I"
    CAT_II = "CAT II"
    CAT_III = "CAT III"

    @classmethod
    def coerce(cls, value: object) -> "Severity":
        """Return the matching member, or CAT II for any unrecognized value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls._value2member_map_.get(value, cls.CAT_II)  # type: ignore[return-value]
        return cls.CAT_II

    @classmethod
    def from_raw(cls, raw: object) -> "Severity":
        """Map a raw XCCDF/CKL severity (high|medium|low) to a category."""
        return SEVERITY_MAP.get(str(raw or ""), cls.CAT_II)

    @property
    def raw(self) -> str:
        return SEVERITY_RAW[self]

    @classmethod
    def all_values(cls) -> FrozenSet[str]:
        return frozenset(m.value for m in cls)


class Status(str, Enum):
    """Finding status of a rule under review."""

    NOT_REVIEWED = "not_reviewed"
    NOT_A_FINDING = "not_a_finding"
    OPEN = "open"
    NOT_APPLICABLE = "not_applicable"

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a status value is valid.

        Args:
            value: The status string to validate

        Returns:
            True if the status is valid, False otherwise
        """
        return value in cls._value2member_map_

    @classmethod
    def coerce(cls, value: object) -> "Status":
        """Return the matching member, or NOT_REVIEWED for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls._value2member_map_.get(value, cls.NOT_REVIEWED)  # type: ignore[return-value]
        return cls.NOT_REVIEWED

    @classmethod
    def from_ckl(cls, text: object) -> "Status":
        """Map CKL ``STATUS`` element text to a status."""
        return CKL_STATUS_MAP.get(str(text or ""), cls.NOT_REVIEWED)

    @property
    def ckl(self) -> str:
        return STATUS_CKL_MAP[self]

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @classmethod
    def all_values(cls) -> FrozenSet[str]:
        return frozenset(m.value for m in cls)


# ──────────────────────────────────────────────────────────────────────────────
# LOOKUP TABLES (read-only)
# ──────────────────────────────────────────────────────────────────────────────

SEVERITY_MAP: Mapping[str, Severity] = MappingProxyType({
    "high": Severity.CAT_I,
    "medium": Severity.CAT_II,
    "low": Severity.CAT_III,
})

SEVERITY_RAW: Mapping[Severity, str] = MappingProxyType(
    {cat: raw for raw, cat in SEVERITY_MAP.items()}
)

SEVERITY_ORDER: Tuple[Severity, ...] = (Severity.CAT_I, Severity.CAT_II, Severity.CAT_III)

STATUS_CKL_MAP: Mapping[Status, str] = MappingProxyType({
    Status.NOT_REVIEWED: "Not_Reviewed",
    Status.NOT_A_FINDING: "NotAFinding",
    Status.OPEN: "Open",
    Status.NOT_APPLICABLE: "Not_Applicable",
})

# Accepts both spellings STIG Viewer has emitted over the years.
CKL_STATUS_MAP: Mapping[str, Status] = MappingProxyType({
    "NotAFinding": Status.NOT_A_FINDING,
    "Not_A_Finding": Status.NOT_A_FINDING,
    "Open": Status.OPEN,
    "Not_Applicable": Status.NOT_APPLICABLE,
    "NotApplicable": Status.NOT_APPLICABLE,
})

STATUS_LABELS: Mapping[Status, str] = MappingProxyType({
    Status.NOT_REVIEWED: "Not Reviewed",
    Status.NOT_A_FINDING: "Not a Finding",
    Status.OPEN: "Open",
    Status.NOT_APPLICABLE: "Not Applicable",
})

# Rule content fields compared between two versions of a STIG.
DIFF_FIELDS: Tuple[str, ...] = ("title", "severity", "description", "check_text", "fix_text")

# DISA subsections removed (with their content) from XCCDF descriptions.
DISA_SECTION_TAGS: Tuple[str, ...] = (
    "FalsePositives",
    "FalseNegatives",
    "Documentable",
    "Mitigations",
    "SeverityOverrideGuidance",
    "PotentialImpacts",
    "ThirdPartyTools",
    "MitigationControl",
    "Responsibility",
    "IAControls",
)

DEFAULT_STIG_TITLE = "Unknown STIG"
DEFAULT_CKL_TITLE = "Imported Checklist"
TITLE_PREFIX = "DPMS Target "
SYNTHETIC_VID_BASE = 100000
