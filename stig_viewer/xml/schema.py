"""
STIG Viewer XML Schema Definitions.

Defines element names and fixed values for the two XML dialects handled
by the package:

- DISA Checklist (CKL): CHECKLIST → ASSET + STIGS/iSTIG/(STIG_INFO, VULN*)
- XCCDF Benchmark: Benchmark → Group* → Rule
"""

from __future__ import annotations
from typing import Dict, Tuple


class Sch:
    """
    XML schema definitions for STIG/CKL processing.

    The CKL vocabulary below is what DISA STIG Viewer accepts on import;
    names and nesting must match exactly.

    Thread-safe: Yes (immutable class constants)
    """

    # Root element and version comment
    ROOT = "CHECKLIST"
    COMMENT = "DISA STIG Viewer :: Web STIG Viewer Export"

    # CKL structure
    ASSET_TAG = "ASSET"
    STIGS = "STIGS"
    ISTIG = "iSTIG"
    STIG_INFO = "STIG_INFO"
    VULN_TAG = "VULN"

    # Asset elements written on export, in order
    ASSET: Tuple[str, ...] = (
        "ROLE",
        "ASSET_TYPE",
        "HOST_NAME",
        "HOST_IP",
        "HOST_MAC",
        "HOST_FQDN",
        "TARGET_COMMENT",
        "TECH_AREA",
        "TARGET_KEY",
        "WEB_OR_DATABASE",
        "WEB_DB_SITE",
        "WEB_DB_INSTANCE",
    )

    # Fixed asset values; everything not listed here or supplied is empty
    ASSET_DEFAULTS: Dict[str, str] = {
        "ROLE": "None",
        "ASSET_TYPE": "Computing",
        "WEB_OR_DATABASE": "false",
    }

    # Asset fields taken from AssetInfo
    ASSET_FIELDS: Dict[str, str] = {
        "HOST_NAME": "hostname",
        "HOST_IP": "ip",
        "HOST_MAC": "mac",
        "HOST_FQDN": "fqdn",
    }

    # STIG_INFO names read and written (SID_NAME -> Stig attribute)
    STIG: Dict[str, str] = {
        "title": "title",
        "version": "version",
        "releaseinfo": "release_info",
    }

    # Mandatory STIG_DATA attributes written per VULN, in order
    VULN: Tuple[str, ...] = (
        "Vuln_Num",
        "Severity",
        "Group_Title",
        "Rule_ID",
        "Rule_Title",
        "Vuln_Discuss",
        "Check_Content",
        "Fix_Text",
    )

    # Status elements closing each VULN; the last two are always empty
    STATUS: Tuple[str, ...] = (
        "STATUS",
        "FINDING_DETAILS",
        "COMMENTS",
        "SEVERITY_OVERRIDE",
        "SEVERITY_JUSTIFICATION",
    )

    # CKL element names
    STATUS_TAG = "STATUS"
    FINDING_DETAILS = "FINDING_DETAILS"
    COMMENTS = "COMMENTS"
    STIG_DATA = "STIG_DATA"
    VULN_ATTRIBUTE = "VULN_ATTRIBUTE"
    ATTRIBUTE_DATA = "ATTRIBUTE_DATA"
    SI_DATA = "SI_DATA"
    SID_NAME = "SID_NAME"
    SID_DATA = "SID_DATA"
    CCI_REF = "CCI_REF"
    STIG_REF = "STIGRef"

    # XCCDF element names
    XCCDF_BENCHMARK = "Benchmark"
    XCCDF_GROUP = "Group"
    XCCDF_RULE = "Rule"
    XCCDF_TITLE = ("title", "Title")
    XCCDF_DESCRIPTION = ("description", "Description")
    XCCDF_VERSION = ("version", "Version")
    XCCDF_RELEASE_INFO = ("plain-text", "release-info")
    XCCDF_FIXTEXT = ("fixtext", "fix", "Fix")
    XCCDF_CHECK_CONTENT = "check-content"
    XCCDF_IDENT = "ident"

    @staticmethod
    def strip_ns(tag: str) -> str:
        """
        Remove namespace prefix from tag.

        Example:
            >>> Sch.strip_ns("{http://checklists.nist.gov/xccdf/1.2}Rule")
            'Rule'
            >>> Sch.strip_ns("VULN")
            'VULN'
        """
        if not isinstance(tag, str):
            return ""
        if "}" in tag:
            return tag.split("}", 1)[1]
        return tag
