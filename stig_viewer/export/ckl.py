"""CKL serializer.

Writes a ``Stig`` plus asset identity as DISA Checklist XML that STIG
Viewer imports. Only modeled fields are emitted; SEVERITY_OVERRIDE and
SEVERITY_JUSTIFICATION are always empty.

The document is built line by line rather than through ElementTree so
that text escaping (including quotes and apostrophes) and layout are
exactly reproducible.
"""

from __future__ import annotations

from typing import List

from stig_viewer.core.constants import SEVERITY_RAW, STATUS_CKL_MAP, Severity, Status
from stig_viewer.models.stig import AssetInfo, Rule, Stig
from stig_viewer.xml.schema import Sch
from stig_viewer.xml.utils import XmlUtils

esc = XmlUtils.escape


def export_ckl(stig: Stig, hostname: str = "", ip: str = "", mac: str = "", fqdn: str = "") -> str:
    """
    Serialize ``stig`` as CKL XML text.

    Args:
        stig: STIG to serialize
        hostname: HOST_NAME value
        ip: HOST_IP value
        mac: HOST_MAC value
        fqdn: HOST_FQDN value

    Returns:
        CKL document text (deterministic for identical inputs)
    """
    asset = AssetInfo(hostname=hostname or "", ip=ip or "", mac=mac or "", fqdn=fqdn or "")

    lines: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f"<!--{Sch.COMMENT}-->",
        f"<{Sch.ROOT}>",
    ]
    lines.extend(_asset_lines(asset))
    lines.append(f"  <{Sch.STIGS}>")
    lines.append(f"    <{Sch.ISTIG}>")
    lines.extend(_stig_info_lines(stig))
    for rule in stig.rules:
        lines.extend(_vuln_lines(rule))
    lines.append(f"    </{Sch.ISTIG}>")
    lines.append(f"  </{Sch.STIGS}>")
    lines.append(f"</{Sch.ROOT}>")
    return "\n".join(lines)


def export_ckl_for(stig: Stig, asset: AssetInfo) -> str:
    """``export_ckl`` taking an ``AssetInfo``."""
    return export_ckl(stig, asset.hostname, asset.ip, asset.mac, asset.fqdn)


def _element(tag: str, value: str, indent: int) -> str:
    return f"{' ' * indent}<{tag}>{value}</{tag}>"


def _asset_lines(asset: AssetInfo) -> List[str]:
    lines = [f"  <{Sch.ASSET_TAG}>"]
    for tag in Sch.ASSET:
        if tag in Sch.ASSET_FIELDS:
            value = esc(getattr(asset, Sch.ASSET_FIELDS[tag]))
        else:
            value = Sch.ASSET_DEFAULTS.get(tag, "")
        lines.append(_element(tag, value, 4))
    lines.append(f"  </{Sch.ASSET_TAG}>")
    return lines


def _stig_info_lines(stig: Stig) -> List[str]:
    lines = [f"      <{Sch.STIG_INFO}>"]
    for name, attr in Sch.STIG.items():
        lines.append(
            f"        <{Sch.SI_DATA}><{Sch.SID_NAME}>{name}</{Sch.SID_NAME}>"
            f"<{Sch.SID_DATA}>{esc(getattr(stig, attr))}</{Sch.SID_DATA}></{Sch.SI_DATA}>"
        )
    lines.append(f"      </{Sch.STIG_INFO}>")
    return lines


def _stig_data(name: str, value: str) -> str:
    return (
        f"        <{Sch.STIG_DATA}><{Sch.VULN_ATTRIBUTE}>{esc(name)}</{Sch.VULN_ATTRIBUTE}>"
        f"<{Sch.ATTRIBUTE_DATA}>{esc(value)}</{Sch.ATTRIBUTE_DATA}></{Sch.STIG_DATA}>"
    )


def _vuln_lines(rule: Rule) -> List[str]:
    values = {
        "Vuln_Num": rule.stig_id,
        "Severity": SEVERITY_RAW.get(Severity.coerce(rule.severity), "medium"),
        "Group_Title": rule.group_id,
        "Rule_ID": rule.id,
        "Rule_Title": rule.title,
        "Vuln_Discuss": rule.description,
        "Check_Content": rule.check_text,
        "Fix_Text": rule.fix_text,
    }
    lines = [f"      <{Sch.VULN_TAG}>"]
    lines.extend(_stig_data(name, values[name]) for name in Sch.VULN)
    lines.extend(_stig_data(Sch.CCI_REF, cci) for cci in rule.cci_ids)

    status = STATUS_CKL_MAP.get(Status.coerce(rule.status), STATUS_CKL_MAP[Status.NOT_REVIEWED])
    lines.append(_element(Sch.STATUS_TAG, status, 8))
    lines.append(_element(Sch.FINDING_DETAILS, esc(rule.finding_details), 8))
    lines.append(_element(Sch.COMMENTS, esc(rule.comments), 8))
    for tag in Sch.STATUS[3:]:
        lines.append(_element(tag, "", 8))
    lines.append(f"      </{Sch.VULN_TAG}>")
    return lines
