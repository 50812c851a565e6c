"""CCI → NIST SP 800-53 control lookup.

The built-in table covers CCIs that appear frequently in application and
operating system STIGs. A complete table (DISA publishes the full CCI
list) can be loaded from JSON with ``load_cci_map`` and passed to the
POAM exporter in place of ``CCI_MAP``.

JSON format accepted by ``load_cci_map``::

    {"CCI-000366": {"control": "CM-6 b", "title": "Configuration Settings"}, ...}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Union

from stig_viewer.exceptions import FileError, ValidationError


@dataclass(frozen=True)
class CciControl:
    """The 800-53 control a CCI maps to."""

    control: str
    title: str = ""


CCI_MAP: Mapping[str, CciControl] = MappingProxyType({
    "CCI-000001": CciControl("AC-1 a 1", "Access Control Policy and Procedures"),
    "CCI-000015": CciControl("AC-2 (1)", "Automated System Account Management"),
    "CCI-000016": CciControl("AC-2 (2)", "Removal of Temporary / Emergency Accounts"),
    "CCI-000017": CciControl("AC-2 (3)", "Disable Inactive Accounts"),
    "CCI-000018": CciControl("AC-2 (4)", "Automated Audit Actions"),
    "CCI-000044": CciControl("AC-7 a", "Unsuccessful Logon Attempts"),
    "CCI-000048": CciControl("AC-8 a", "System Use Notification"),
    "CCI-000054": CciControl("AC-10", "Concurrent Session Control"),
    "CCI-000056": CciControl("AC-11 b", "Session Lock"),
    "CCI-000057": CciControl("AC-11 a", "Session Lock"),
    "CCI-000068": CciControl("AC-17 (2)", "Protection of Confidentiality / Integrity Using Encryption"),
    "CCI-000130": CciControl("AU-3", "Content of Audit Records"),
    "CCI-000131": CciControl("AU-3", "Content of Audit Records"),
    "CCI-000132": CciControl("AU-3", "Content of Audit Records"),
    "CCI-000133": CciControl("AU-3", "Content of Audit Records"),
    "CCI-000134": CciControl("AU-3", "Content of Audit Records"),
    "CCI-000135": CciControl("AU-3 (1)", "Additional Audit Information"),
    "CCI-000139": CciControl("AU-5 a", "Response to Audit Processing Failures"),
    "CCI-000162": CciControl("AU-9", "Protection of Audit Information"),
    "CCI-000163": CciControl("AU-9", "Protection of Audit Information"),
    "CCI-000164": CciControl("AU-9", "Protection of Audit Information"),
    "CCI-000169": CciControl("AU-12 a", "Audit Generation"),
    "CCI-000172": CciControl("AU-12 c", "Audit Generation"),
    "CCI-000185": CciControl("IA-5 (2) (a)", "PKI-Based Authentication"),
    "CCI-000192": CciControl("IA-5 (1) (a)", "Password-Based Authentication"),
    "CCI-000196": CciControl("IA-5 (1) (c)", "Password-Based Authentication"),
    "CCI-000197": CciControl("IA-5 (1) (c)", "Password-Based Authentication"),
    "CCI-000205": CciControl("IA-5 (1) (a)", "Password-Based Authentication"),
    "CCI-000213": CciControl("AC-3", "Access Enforcement"),
    "CCI-000366": CciControl("CM-6 b", "Configuration Settings"),
    "CCI-000381": CciControl("CM-7 a", "Least Functionality"),
    "CCI-000382": CciControl("CM-7 b", "Least Functionality"),
    "CCI-000764": CciControl("IA-2", "Identification and Authentication (Organizational Users)"),
    "CCI-000765": CciControl("IA-2 (1)", "Network Access to Privileged Accounts"),
    "CCI-000766": CciControl("IA-2 (2)", "Network Access to Non-Privileged Accounts"),
    "CCI-000803": CciControl("IA-7", "Cryptographic Module Authentication"),
    "CCI-001133": CciControl("SC-10", "Network Disconnect"),
    "CCI-001184": CciControl("SC-23", "Session Authenticity"),
    "CCI-001199": CciControl("SC-28", "Protection of Information at Rest"),
    "CCI-001312": CciControl("SI-11 a", "Error Handling"),
    "CCI-001314": CciControl("SI-11 b", "Error Handling"),
    "CCI-001453": CciControl("AC-17 (2)", "Protection of Confidentiality / Integrity Using Encryption"),
    "CCI-001499": CciControl("CM-5 (6)", "Limit Library Privileges"),
    "CCI-002238": CciControl("AC-7 b", "Unsuccessful Logon Attempts"),
    "CCI-002418": CciControl("SC-8", "Transmission Confidentiality and Integrity"),
    "CCI-002450": CciControl("SC-13", "Cryptographic Protection"),
    "CCI-002476": CciControl("SC-28 (1)", "Cryptographic Protection"),
})


def lookup(cci_id: str, cci_map: Mapping[str, CciControl] = CCI_MAP) -> Optional[CciControl]:
    """Mapping for ``cci_id``, or None when the CCI is unmapped."""
    return cci_map.get(cci_id)


def resolve_controls(cci_ids: Iterable[str], cci_map: Mapping[str, CciControl] = CCI_MAP) -> List[str]:
    """Unique mapped controls for ``cci_ids`` in first-seen order; unmapped CCIs are skipped."""
    controls: List[str] = []
    for cci_id in cci_ids or ():
        entry = cci_map.get(cci_id)
        if entry is not None and entry.control and entry.control not in controls:
            controls.append(entry.control)
    return controls


def load_cci_map(path: Union[str, Path]) -> Mapping[str, CciControl]:
    """
    Load a CCI table from a JSON file.

    Args:
        path: JSON file mapping CCI id to ``{"control": ..., "title": ...}``
            (a bare control string is also accepted)

    Returns:
        Read-only mapping of CCI id to ``CciControl``

    Raises:
        FileError: If the file cannot be read or is not valid JSON
        ValidationError: If the JSON is not an object of CCI entries
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise FileError(f"Cannot load CCI map: {exc}", {"file": str(path)}) from exc

    if not isinstance(data, dict):
        raise ValidationError("CCI map must be a JSON object", {"file": str(path)})

    table: Dict[str, CciControl] = {}
    for cci_id, entry in data.items():
        if isinstance(entry, str):
            table[cci_id] = CciControl(entry)
        elif isinstance(entry, dict) and entry.get("control"):
            table[cci_id] = CciControl(str(entry["control"]), str(entry.get("title", "")))
        else:
            raise ValidationError(f"Invalid CCI entry: {cci_id}", {"file": str(path)})
    return MappingProxyType(table)
