"""User interfaces.

The ``cli`` module provides the ``stig-viewer`` command.
"""

from __future__ import annotations

from stig_viewer.ui.cli import main

__all__ = ["main"]
