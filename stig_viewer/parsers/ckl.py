"""DISA Checklist (CKL) parser.

Converts CKL XML into a ``Stig``. A checklist is itself a review artifact,
so status, finding details and comments are imported along with the rule
content. Missing pieces degrade to defaults instead of failing.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple
from xml.etree.ElementTree import Element

from stig_viewer.core.constants import (
    DEFAULT_CKL_TITLE,
    SYNTHETIC_VID_BASE,
    Severity,
    Status,
)
from stig_viewer.core.logging import LOG
from stig_viewer.exceptions import ParseError
from stig_viewer.models.stig import Rule, Stig
from stig_viewer.xml.schema import Sch
from stig_viewer.xml.utils import XmlUtils


def parse_ckl(xml_text: str) -> Stig:
    """
    Parse CKL checklist text.

    Args:
        xml_text: CKL document text

    Returns:
        Parsed STIG; a checklist without STIG_INFO is titled
        "Imported Checklist". Text that cannot be parsed at all yields
        an empty STIG with that title.
    """
    try:
        root = XmlUtils.parse(xml_text, "CKL")
    except ParseError as exc:
        LOG.w(f"Unreadable checklist, importing as empty: {exc}")
        return Stig(title=DEFAULT_CKL_TITLE)

    info = _read_stig_info(XmlUtils.find_first(root, Sch.STIG_INFO, include_self=True))

    rules = [
        _parse_vuln(vuln, index)
        for index, vuln in enumerate(XmlUtils.find_all(root, Sch.VULN_TAG, include_self=True))
    ]

    return Stig(
        title=info.get("title") or DEFAULT_CKL_TITLE,
        description="",
        version=info.get("version", ""),
        release_info=info.get("releaseinfo", ""),
        rules=tuple(rules),
    )


def _read_stig_info(stig_info: Optional[Element]) -> Dict[str, str]:
    """Collect the title/version/releaseinfo SI_DATA pairs."""
    values: Dict[str, str] = {}
    if stig_info is None:
        return values
    for si_data in XmlUtils.find_all(stig_info, Sch.SI_DATA):
        name = XmlUtils.child_text(si_data, Sch.SID_NAME)
        if name in Sch.STIG:
            values[name] = XmlUtils.child_text(si_data, Sch.SID_DATA)
    return values


def _read_attributes(vuln: Element) -> Tuple[Dict[str, str], List[str]]:
    """Collect STIG_DATA pairs; repeated CCI_REF values accumulate in order."""
    attrs: Dict[str, str] = {}
    cci_ids: List[str] = []
    for stig_data in XmlUtils.find_all(vuln, Sch.STIG_DATA):
        name = XmlUtils.child_text(stig_data, Sch.VULN_ATTRIBUTE)
        value = XmlUtils.child_text(stig_data, Sch.ATTRIBUTE_DATA)
        if name == Sch.CCI_REF:
            cci_ids.append(value)
        else:
            attrs[name] = value
    return attrs, cci_ids


def _parse_vuln(vuln: Element, index: int) -> Rule:
    attrs, cci_ids = _read_attributes(vuln)

    fix_text = attrs.get("Fix_Text")
    if fix_text is None:
        fix_text = attrs.get(Sch.STIG_REF, "")

    return Rule(
        id=attrs.get("Rule_ID", f"rule-{index}"),
        stig_id=attrs.get("Vuln_Num", f"V-{SYNTHETIC_VID_BASE + index}"),
        group_id=attrs.get("Group_Title", ""),
        title=attrs.get("Rule_Title", ""),
        description=XmlUtils.clean_description(attrs.get("Vuln_Discuss", ""), strip_sections=False),
        check_text=attrs.get("Check_Content", ""),
        fix_text=fix_text,
        severity=Severity.from_raw(attrs.get("Severity", "medium").lower()),
        cci_ids=tuple(cci_ids),
        status=Status.from_ckl(XmlUtils.child_text(vuln, Sch.STATUS_TAG)),
        finding_details=XmlUtils.child_text(vuln, Sch.FINDING_DETAILS),
        comments=XmlUtils.child_text(vuln, Sch.COMMENTS),
    )
