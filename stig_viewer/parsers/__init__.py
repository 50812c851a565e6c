"""
Document parsers.

Both dialects produce the same canonical ``Stig``:

- ``parse_xccdf`` for XCCDF benchmarks (.xml)
- ``parse_ckl`` for DISA checklists (.ckl)
"""

from __future__ import annotations

from typing import Optional

from stig_viewer.models.stig import Stig
from stig_viewer.parsers.ckl import parse_ckl
from stig_viewer.parsers.xccdf import parse_xccdf

CKL_SUFFIX = ".ckl"


def parse_document(xml_text: str, filename: Optional[str] = None) -> Stig:
    """Parse ``xml_text`` as CKL when ``filename`` ends in .ckl, else as XCCDF."""
    if filename and filename.lower().endswith(CKL_SUFFIX):
        return parse_ckl(xml_text)
    return parse_xccdf(xml_text)


__all__ = ["parse_ckl", "parse_xccdf", "parse_document", "CKL_SUFFIX"]
