"""
I/O and file operations.

Atomic writes and encoding-detecting reads.
"""

from __future__ import annotations

from stig_viewer.io.file_ops import FO, retry

__all__ = ["FO", "retry"]
