"""
XML processing modules.

This package contains the CKL/XCCDF schema definitions and the element
lookup and text helpers used by the parsers and serializers.
"""

from __future__ import annotations

from stig_viewer.xml.schema import Sch
from stig_viewer.xml.utils import XmlUtils

__all__ = [
    "Sch",
    "XmlUtils",
]
