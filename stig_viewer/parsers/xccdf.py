"""XCCDF benchmark parser.

Converts DISA XCCDF benchmark XML into a ``Stig``. Field lookup is
permissive: lowercase tag names are tried before capitalized ones, and
elements are matched un-namespaced first, then in any namespace, since
some XCCDF exports omit the default namespace declaration.

XCCDF carries no review state, so every parsed rule starts as
``not_reviewed`` with empty finding details and comments.
"""

from __future__ import annotations

from typing import List, Optional
from xml.etree.ElementTree import Element

from stig_viewer.core.constants import (
    DEFAULT_STIG_TITLE,
    SYNTHETIC_VID_BASE,
    TITLE_PREFIX,
    Severity,
    Status,
)
from stig_viewer.exceptions import ParseError
from stig_viewer.models.stig import Rule, Stig
from stig_viewer.xml.schema import Sch
from stig_viewer.xml.utils import XmlUtils


def parse_xccdf(xml_text: str) -> Stig:
    """
    Parse XCCDF benchmark text.

    Args:
        xml_text: XCCDF document text

    Returns:
        Parsed STIG, rules in document order

    Raises:
        ParseError: If the text is not XML or contains no Benchmark element
    """
    root = XmlUtils.parse(xml_text, "XCCDF")

    benchmark = XmlUtils.find_first(root, Sch.XCCDF_BENCHMARK, include_self=True)
    if benchmark is None:
        raise ParseError("No Benchmark element found in XCCDF")

    title = XmlUtils.first_text(benchmark, Sch.XCCDF_TITLE, DEFAULT_STIG_TITLE)
    if title.startswith(TITLE_PREFIX):
        title = title[len(TITLE_PREFIX):]

    rules: List[Rule] = []
    for index, group in enumerate(XmlUtils.find_all(benchmark, Sch.XCCDF_GROUP)):
        rule = _parse_group(group, index)
        if rule is not None:
            rules.append(rule)

    return Stig(
        title=title,
        description=XmlUtils.first_text(benchmark, Sch.XCCDF_DESCRIPTION),
        version=XmlUtils.first_text(benchmark, Sch.XCCDF_VERSION),
        release_info=XmlUtils.first_text(benchmark, Sch.XCCDF_RELEASE_INFO),
        rules=tuple(rules),
    )


def _parse_group(group: Element, index: int) -> Optional[Rule]:
    """Build the rule of one Group; groups without a Rule yield None."""
    rule_el = XmlUtils.find_first(group, Sch.XCCDF_RULE)
    if rule_el is None:
        return None

    group_id = group.get("id") or ""
    severity = rule_el.get("severity") or "medium"

    cci_ids = []
    for ident in XmlUtils.find_all(rule_el, Sch.XCCDF_IDENT):
        value = XmlUtils.text_content(ident)
        if value:
            cci_ids.append(value)

    return Rule(
        id=rule_el.get("id") or f"rule-{index}",
        stig_id=group_id or f"V-{SYNTHETIC_VID_BASE + index}",
        group_id=group_id,
        title=XmlUtils.first_text(rule_el, Sch.XCCDF_TITLE),
        description=XmlUtils.clean_description(
            XmlUtils.first_text(rule_el, Sch.XCCDF_DESCRIPTION)
        ),
        check_text=XmlUtils.text_content(XmlUtils.find_first(rule_el, Sch.XCCDF_CHECK_CONTENT)),
        fix_text=XmlUtils.first_text(rule_el, Sch.XCCDF_FIXTEXT),
        severity=Severity.from_raw(severity),
        cci_ids=tuple(cci_ids),
        status=Status.NOT_REVIEWED,
    )
