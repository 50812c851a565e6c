"""File-level workflow for STIG documents.

This module provides the Proc class which handles:
- Loading XCCDF benchmarks and CKL checklists from disk
- STIG → CKL conversion
- POAM export (CSV / JSON)
- STIG version diff
- Review statistics
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from stig_viewer.controls.cci import CCI_MAP, CciControl
from stig_viewer.core.config import Cfg
from stig_viewer.core.constants import Severity, Status
from stig_viewer.core.logging import LOG
from stig_viewer.exceptions import FileError, ValidationError
from stig_viewer.export.ckl import export_ckl_for
from stig_viewer.export.poam import build_rows, export_poam_csv, export_poam_json
from stig_viewer.io.file_ops import FO
from stig_viewer.models.stig import AssetInfo, Stig
from stig_viewer.parsers import parse_document
from stig_viewer.processor.diff import DiffResult, diff_stigs
from stig_viewer.processor.review import StigStats, ckl_filename, compute_stats, poam_filename

POAM_FORMATS = ("csv", "json")
DIFF_FORMATS = ("summary", "json")
STATS_FORMATS = ("text", "json")


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


class Proc:
    """STIG document processor."""

    def __init__(self, cci_map: Optional[Mapping[str, CciControl]] = None):
        self.cci_map = cci_map if cci_map is not None else CCI_MAP

    # -------------------------------------------------------------------- load
    def load(self, path: Union[str, Path]) -> Stig:
        """Read and parse a document; ``.ckl`` files are checklists, anything else XCCDF."""
        path = Path(path)
        with LOG.scope(file=path.name):
            stig = parse_document(FO.read(path), path.name)
            if len(stig.rules) > Cfg.MAX_RULES:
                LOG.w(f"Large checklist: {len(stig.rules)} rules")
            LOG.i(f"Loaded '{stig.title}' ({len(stig.rules)} rules)")
        return stig

    @staticmethod
    def _output(out: Optional[Union[str, Path]], default_name: str) -> Path:
        if out:
            return Path(out)
        try:
            Cfg.init()
        except (OSError, RuntimeError) as exc:
            raise FileError("No writable export directory", {"file": default_name}) from exc
        return Cfg.EXPORT_DIR / default_name

    # ---------------------------------------------------------------- stig->ckl
    def to_ckl(
        self,
        src: Union[str, Path],
        out: Optional[Union[str, Path]] = None,
        asset: Optional[AssetInfo] = None,
    ) -> Dict[str, Any]:
        """
        Convert a benchmark (or re-export a checklist) as CKL.

        Args:
            src: XCCDF or CKL file
            out: Output path (default: ``<title>.ckl`` in the export directory)
            asset: Host metadata for the ASSET block

        Returns:
            Dictionary with output path, title and rule count
        """
        with LOG.scope(op="to_ckl"):
            stig = self.load(src)
            target = self._output(out, ckl_filename(stig.title))
            FO.write_text(target, export_ckl_for(stig, asset or AssetInfo()))
            LOG.i(f"Checklist created: {target}")
        return {"ok": True, "output": str(target), "title": stig.title, "rules": len(stig.rules)}

    # -------------------------------------------------------------------- poam
    def to_poam(
        self,
        src: Union[str, Path],
        out: Optional[Union[str, Path]] = None,
        asset: Optional[AssetInfo] = None,
        *,
        fmt: str = "csv",
        include_not_reviewed: bool = False,
    ) -> Dict[str, Any]:
        """
        Export open (and optionally not-reviewed) findings as a POAM.

        Args:
            src: XCCDF or CKL file
            out: Output path (default: ``<title>_POAM.<fmt>`` in the export directory)
            asset: Host metadata; the hostname fills the org and asset columns
            fmt: 'csv' or 'json'
            include_not_reviewed: Also export rules that were never reviewed

        Returns:
            Dictionary with output path and finding count

        Raises:
            ValidationError: If ``fmt`` is not supported
        """
        if fmt not in POAM_FORMATS:
            raise ValidationError(f"Unsupported POAM format: {fmt}", {"valid": ", ".join(POAM_FORMATS)})

        with LOG.scope(op="to_poam", fmt=fmt):
            stig = self.load(src)
            target = self._output(out, poam_filename(stig.title, fmt))
            if fmt == "csv":
                content = export_poam_csv(stig, asset, include_not_reviewed, self.cci_map)
            else:
                content = dump_json(export_poam_json(stig, asset, include_not_reviewed, self.cci_map))
            findings = len(build_rows(stig, asset, include_not_reviewed, self.cci_map))
            FO.write_text(target, content)
            LOG.i(f"POAM created: {target} ({findings} findings)")
        return {"ok": True, "output": str(target), "title": stig.title, "findings": findings}

    # -------------------------------------------------------------------- diff
    def diff(self, path_a: Union[str, Path], path_b: Union[str, Path]) -> DiffResult:
        """Compare a baseline STIG with a newer one."""
        with LOG.scope(op="diff"):
            result = diff_stigs(self.load(path_a), self.load(path_b))
            s = result.summary()
            LOG.i(f"Added: {s['added']} | Removed: {s['removed']} | Changed: {s['changed']}")
        return result

    @staticmethod
    def format_diff_summary(result: DiffResult, name_a: str, name_b: str, limit: int = 10) -> str:
        """Human-readable diff report."""
        s = result.summary()
        lines: List[str] = []
        lines.append("=" * 80)
        lines.append(f"STIG Comparison: {name_a} vs {name_b}")
        lines.append("=" * 80)
        lines.append(f"Added in {name_b}: {s['added']}")
        lines.append(f"Removed from {name_a}: {s['removed']}")
        lines.append(f"Changed: {s['changed']}")

        sections: Tuple[Tuple[str, List[str]], ...] = (
            ("Added Rules", [f"{r.stig_id}: {r.title[:60]}" for r in result.added]),
            ("Removed Rules", [f"{r.stig_id}: {r.title[:60]}" for r in result.removed]),
            ("Changed Rules", [f"{c.stig_id}: {', '.join(c.fields)}" for c in result.changed]),
        )
        for heading, items in sections:
            if not items:
                continue
            lines.append("")
            lines.append("-" * 80)
            lines.append(f"{heading}:")
            lines.append("-" * 80)
            for item in items[:limit]:
                lines.append(f"  {item}")
            if len(items) > limit:
                lines.append(f"  ... and {len(items) - limit} more")
        return "\n".join(lines)

    # ------------------------------------------------------------------- stats
    def stats(self, src: Union[str, Path]) -> Tuple[Stig, StigStats]:
        """Load ``src`` and compute its review statistics."""
        stig = self.load(src)
        return stig, compute_stats(stig)

    @staticmethod
    def format_stats_text(stig: Stig, stats: StigStats, name: str = "") -> str:
        """Format statistics as human-readable text."""
        generated = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        lines: List[str] = []
        lines.append("=" * 80)
        lines.append(f"STIG Review Statistics: {stig.title}")
        lines.append("=" * 80)
        if name:
            lines.append(f"File: {name}")
        lines.append(f"Generated: {generated}")
        lines.append("")
        lines.append(f"Total Rules: {stats.total}")
        lines.append(f"Evaluated: {stats.evaluated} ({stats.pct}%)")
        lines.append("")
        lines.append("Status Breakdown:")
        lines.append("-" * 40)
        for status in Status:
            count = stats.by_status.get(status.value, 0)
            lines.append(f"  {status.label:20} {count:6}")
        lines.append("")
        lines.append("Severity Breakdown:")
        lines.append("-" * 40)
        for severity in Severity:
            count = stats.by_severity.get(severity.value, 0)
            lines.append(f"  {severity.value:8} ({severity.raw:6}) {count:6}")
        lines.append("=" * 80)
        return "\n".join(lines)


__all__ = ["Proc", "dump_json", "POAM_FORMATS", "DIFF_FORMATS", "STATS_FORMATS"]
