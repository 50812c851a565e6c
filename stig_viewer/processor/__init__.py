"""Processing operations.

- ``diff``: rule-level comparison of two STIG versions
- ``review``: status updates, filtering and statistics on a loaded STIG
- ``processor``: ``Proc`` file-level workflow used by the CLI
"""

from __future__ import annotations

from stig_viewer.processor.diff import ChangedEntry, DiffResult, diff_stigs
from stig_viewer.processor.review import (
    StigStats,
    ckl_filename,
    compute_stats,
    export_basename,
    filter_rules,
    poam_filename,
    set_all_status,
    update_rule,
)
from stig_viewer.processor.processor import Proc

__all__ = [
    "ChangedEntry",
    "DiffResult",
    "diff_stigs",
    "StigStats",
    "compute_stats",
    "export_basename",
    "ckl_filename",
    "poam_filename",
    "filter_rules",
    "set_all_status",
    "update_rule",
    "Proc",
]
