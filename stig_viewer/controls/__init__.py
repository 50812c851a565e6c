"""Control-correlation (CCI) lookup."""

from __future__ import annotations

from stig_viewer.controls.cci import (
    CCI_MAP,
    CciControl,
    load_cci_map,
    lookup,
    resolve_controls,
)

__all__ = ["CCI_MAP", "CciControl", "load_cci_map", "lookup", "resolve_controls"]
