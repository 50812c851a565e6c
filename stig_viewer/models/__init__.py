"""STIG document model."""

from __future__ import annotations

from stig_viewer.models.stig import AssetInfo, Rule, Stig, wire_name

__all__ = ["AssetInfo", "Rule", "Stig", "wire_name"]
