"""
Exporters.

- ``export_ckl``: STIG → DISA Checklist XML
- ``export_poam_csv`` / ``export_poam_json``: STIG → POAM rows
"""

from __future__ import annotations

from stig_viewer.export.ckl import export_ckl, export_ckl_for
from stig_viewer.export.poam import (
    POAM_HEADERS,
    build_rows,
    export_poam_csv,
    export_poam_json,
    resolve_control,
)

__all__ = [
    "export_ckl",
    "export_ckl_for",
    "POAM_HEADERS",
    "build_rows",
    "export_poam_csv",
    "export_poam_json",
    "resolve_control",
]
