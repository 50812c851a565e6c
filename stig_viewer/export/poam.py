"""POAM (Plan of Action and Milestones) exporter.

CSV and JSON exports share one row builder so both formats always carry
identical content. Findings marked not_a_finding or not_applicable are
never exported; by default only open findings are, and with
``include_non_reviewed`` not-reviewed rules are added.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from stig_viewer.controls.cci import CCI_MAP, CciControl, resolve_controls
from stig_viewer.core.constants import Status
from stig_viewer.models.stig import AssetInfo, Rule, Stig

POAM_HEADERS: Tuple[str, ...] = (
    "Control Vulnerability ID",
    "Office / Org",
    "Security Control Number (800-53)",
    "Weakness Name",
    "Weakness Description",
    "Weakness Detector Source",
    "Weakness Source Identifier",
    "Asset Identifier",
    "Point of Contact",
    "Resources Required",
    "Scheduled Completion Date",
    "Milestone with Completion Dates",
    "Milestone Changes",
    "Source Identifying Control Vulnerability",
    "Status",
    "Comments",
)

STATUS_ONGOING = "Ongoing"
STATUS_SUBMITTED = "Submitted"

_EXCLUDED = (Status.NOT_A_FINDING, Status.NOT_APPLICABLE)


def resolve_control(cci_ids, cci_map: Mapping[str, CciControl] = CCI_MAP) -> str:
    """Unique 800-53 controls for ``cci_ids`` joined with ", "."""
    return ", ".join(resolve_controls(cci_ids, cci_map))


def include_rule(rule: Rule, include_non_reviewed: bool = False) -> bool:
    """Whether ``rule`` belongs in the POAM."""
    if rule.status in _EXCLUDED:
        return False
    if not include_non_reviewed and rule.status != Status.OPEN:
        return False
    return True


def build_rows(
    stig: Stig,
    asset_info: Optional[AssetInfo] = None,
    include_non_reviewed: bool = False,
    cci_map: Mapping[str, CciControl] = CCI_MAP,
) -> List[List[str]]:
    """One 16-column row per retained rule, in rule order."""
    hostname = asset_info.hostname if asset_info is not None else ""
    version = f"v{stig.version}" if stig.version else ""
    source = f"{stig.title} {version} {stig.release_info or ''}".strip()

    rows: List[List[str]] = []
    for rule in stig.rules:
        if not include_rule(rule, include_non_reviewed):
            continue
        rows.append([
            rule.stig_id,
            hostname,
            resolve_control(rule.cci_ids, cci_map),
            rule.title,
            rule.description,
            f"DISA STIG: {stig.title}",
            rule.id,
            hostname,
            "",
            "",
            "",
            "",
            "",
            source,
            STATUS_ONGOING if rule.status == Status.OPEN else STATUS_SUBMITTED,
            rule.comments,
        ])
    return rows


def csv_field(value: Any) -> str:
    """Quote a field containing a comma, quote or newline; double inner quotes."""
    text = "" if value is None else str(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def export_poam_csv(
    stig: Stig,
    asset_info: Optional[AssetInfo] = None,
    include_non_reviewed: bool = False,
    cci_map: Mapping[str, CciControl] = CCI_MAP,
) -> str:
    """
    POAM as CSV text.

    Returns:
        Header line, a newline, then one line per finding joined by "\\n"
    """
    rows = build_rows(stig, asset_info, include_non_reviewed, cci_map)
    header = ",".join(csv_field(h) for h in POAM_HEADERS)
    body = "\n".join(",".join(csv_field(v) for v in row) for row in rows)
    return f"{header}\n{body}"


def export_poam_json(
    stig: Stig,
    asset_info: Optional[AssetInfo] = None,
    include_non_reviewed: bool = False,
    cci_map: Mapping[str, CciControl] = CCI_MAP,
) -> List[Dict[str, str]]:
    """POAM as a list of flat objects keyed by the POAM column headers."""
    rows = build_rows(stig, asset_info, include_non_reviewed, cci_map)
    return [
        {header: (row[i] if i < len(row) else "") or "" for i, header in enumerate(POAM_HEADERS)}
        for row in rows
    ]
