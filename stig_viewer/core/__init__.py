"""Core infrastructure modules.

Provides foundational components including constants and lookup tables,
configuration, logging, and dependency detection.
"""

from __future__ import annotations

from stig_viewer.core.constants import (
    VERSION,
    BUILD_DATE,
    APP_NAME,
    Severity,
    Status,
    SEVERITY_MAP,
    SEVERITY_RAW,
    SEVERITY_ORDER,
    STATUS_CKL_MAP,
    CKL_STATUS_MAP,
    STATUS_LABELS,
    DIFF_FIELDS,
    ENCODINGS,
    MAX_FILE_SIZE,
    MAX_RULES,
)
from stig_viewer.core.deps import Deps
from stig_viewer.core.config import Cfg, CFG
from stig_viewer.core.logging import Log, LOG

__all__ = [
    "VERSION",
    "BUILD_DATE",
    "APP_NAME",
    "Severity",
    "Status",
    "SEVERITY_MAP",
    "SEVERITY_RAW",
    "SEVERITY_ORDER",
    "STATUS_CKL_MAP",
    "CKL_STATUS_MAP",
    "STATUS_LABELS",
    "DIFF_FIELDS",
    "ENCODINGS",
    "MAX_FILE_SIZE",
    "MAX_RULES",
    "Deps",
    "Cfg",
    "CFG",
    "Log",
    "LOG",
]
