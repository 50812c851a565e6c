"""STIG Viewer - read, review and export DISA STIG documents.

Parses XCCDF benchmarks and DISA CKL checklists into one canonical model,
serializes that model back to CKL, exports open findings as a POAM, and
diffs two versions of a STIG.

Package Structure:
    core/           - Constants, configuration, logging, dependency detection
    models/         - Canonical Stig / Rule / AssetInfo model
    xml/            - Element names and XML helpers
    parsers/        - XCCDF and CKL parsers
    export/         - CKL and POAM exporters
    controls/       - CCI → NIST 800-53 control lookup
    processor/      - Diff, review operations and the file-level processor
    io/             - File operations (atomic writes, encoding detection)
    ui/             - Command-line interface
"""

from __future__ import annotations

from stig_viewer.core.constants import VERSION, BUILD_DATE, APP_NAME, Severity, Status
from stig_viewer.exceptions import STIGError, ValidationError, FileError, ParseError
from stig_viewer.models.stig import AssetInfo, Rule, Stig
from stig_viewer.parsers import parse_ckl, parse_document, parse_xccdf
from stig_viewer.export import export_ckl, export_poam_csv, export_poam_json
from stig_viewer.processor.diff import diff_stigs

__version__ = VERSION
__build_date__ = BUILD_DATE
__app_name__ = APP_NAME

__all__ = [
    "VERSION",
    "BUILD_DATE",
    "APP_NAME",
    "Severity",
    "Status",
    "STIGError",
    "ValidationError",
    "FileError",
    "ParseError",
    "AssetInfo",
    "Rule",
    "Stig",
    "parse_ckl",
    "parse_xccdf",
    "parse_document",
    "export_ckl",
    "export_poam_csv",
    "export_poam_json",
    "diff_stigs",
]
