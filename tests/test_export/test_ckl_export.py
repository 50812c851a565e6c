"""
Unit tests for the CKL serializer.

Tests cover:
- Document layout (declaration, comment, asset block, STIG_INFO)
- VULN content and ordering
- XML escaping
- Determinism and round-trip through the CKL parser
"""

import unittest
import xml.etree.ElementTree as ET

from stig_viewer.core.constants import Severity, Status
from stig_viewer.export.ckl import export_ckl, export_ckl_for
from stig_viewer.models.stig import AssetInfo, Rule, Stig
from stig_viewer.parsers.ckl import parse_ckl


def sample_stig():
    return Stig(
        title="Tom & Jerry's STIG",
        version="1",
        release_info="Release: 2",
        rules=(
            Rule(
                id="SV-1r1_rule",
                stig_id="V-1",
                group_id="SRG-APP-000001",
                title="Use <strong> crypto",
                description='Say "hello"',
                check_text="Check",
                fix_text="Fix",
                severity=Severity.CAT_I,
                cci_ids=("CCI-000366", "CCI-000196"),
                status=Status.OPEN,
                finding_details="it's open",
                comments="",
            ),
            Rule(id="SV-2r1_rule", stig_id="V-2", severity=Severity.CAT_III,
                 status=Status.NOT_A_FINDING),
        ),
    )


class TestCklLayout(unittest.TestCase):
    """Test the document skeleton."""

    def setUp(self):
        self.xml = export_ckl(sample_stig(), "web01", "10.0.0.5", "aa:bb:cc:dd:ee:ff", "web01.example.mil")
        self.lines = self.xml.split("\n")

    def test_header(self):
        """Declaration, comment and root come first."""
        self.assertEqual(self.lines[0], '<?xml version="1.0" encoding="UTF-8"?>')
        self.assertEqual(self.lines[1], "<!--DISA STIG Viewer :: Web STIG Viewer Export-->")
        self.assertEqual(self.lines[2], "<CHECKLIST>")
        self.assertEqual(self.lines[-1], "</CHECKLIST>")
        self.assertFalse(self.xml.endswith("\n"))

    def test_asset_block(self):
        """The asset block carries host identity and fixed defaults."""
        self.assertEqual(
            self.lines[3:17],
            [
                "  <ASSET>",
                "    <ROLE>None</ROLE>",
                "    <ASSET_TYPE>Computing</ASSET_TYPE>",
                "    <HOST_NAME>web01</HOST_NAME>",
                "    <HOST_IP>10.0.0.5</HOST_IP>",
                "    <HOST_MAC>aa:bb:cc:dd:ee:ff</HOST_MAC>",
                "    <HOST_FQDN>web01.example.mil</HOST_FQDN>",
                "    <TARGET_COMMENT></TARGET_COMMENT>",
                "    <TECH_AREA></TECH_AREA>",
                "    <TARGET_KEY></TARGET_KEY>",
                "    <WEB_OR_DATABASE>false</WEB_OR_DATABASE>",
                "    <WEB_DB_SITE></WEB_DB_SITE>",
                "    <WEB_DB_INSTANCE></WEB_DB_INSTANCE>",
                "  </ASSET>",
            ],
        )

    def test_stig_info(self):
        """STIG_INFO holds escaped title, version and release info."""
        self.assertIn(
            "        <SI_DATA><SID_NAME>title</SID_NAME>"
            "<SID_DATA>Tom &amp; Jerry&apos;s STIG</SID_DATA></SI_DATA>",
            self.lines,
        )
        self.assertIn(
            "        <SI_DATA><SID_NAME>releaseinfo</SID_NAME><SID_DATA>Release: 2</SID_DATA></SI_DATA>",
            self.lines,
        )

    def test_well_formed(self):
        """The output parses as XML."""
        root = ET.fromstring(self.xml)
        self.assertEqual(root.tag, "CHECKLIST")
        self.assertEqual(len(root.findall("./STIGS/iSTIG/VULN")), 2)

    def test_empty_asset(self):
        """Omitted host identity is written as empty elements."""
        xml = export_ckl(Stig(title="T"))
        self.assertIn("    <HOST_NAME></HOST_NAME>", xml.split("\n"))
        self.assertIn("      <STIG_INFO>", xml.split("\n"))


class TestCklVulns(unittest.TestCase):
    """Test VULN serialization."""

    def setUp(self):
        root = ET.fromstring(export_ckl(sample_stig()))
        self.vulns = root.findall("./STIGS/iSTIG/VULN")

    def attributes(self, vuln):
        return [
            (sd.findtext("VULN_ATTRIBUTE"), sd.findtext("ATTRIBUTE_DATA"))
            for sd in vuln.findall("STIG_DATA")
        ]

    def test_stig_data_order(self):
        """Eight mandatory attributes, then one CCI_REF per CCI."""
        attrs = self.attributes(self.vulns[0])
        self.assertEqual(
            [name for name, _ in attrs],
            ["Vuln_Num", "Severity", "Group_Title", "Rule_ID", "Rule_Title",
             "Vuln_Discuss", "Check_Content", "Fix_Text", "CCI_REF", "CCI_REF"],
        )
        self.assertEqual(attrs[8][1], "CCI-000366")
        self.assertEqual(attrs[9][1], "CCI-000196")

    def test_values_unescape_on_parse(self):
        """Escaped text parses back to the original values."""
        attrs = dict(self.attributes(self.vulns[0]))
        self.assertEqual(attrs["Rule_Title"], "Use <strong> crypto")
        self.assertEqual(attrs["Vuln_Discuss"], 'Say "hello"')
        self.assertEqual(attrs["Severity"], "high")
        self.assertEqual(self.vulns[0].findtext("FINDING_DETAILS"), "it's open")

    def test_status_elements(self):
        """Status and review elements close each VULN."""
        tags = [child.tag for child in self.vulns[0]][-5:]
        self.assertEqual(
            tags,
            ["STATUS", "FINDING_DETAILS", "COMMENTS", "SEVERITY_OVERRIDE", "SEVERITY_JUSTIFICATION"],
        )
        self.assertEqual(self.vulns[0].findtext("STATUS"), "Open")
        self.assertEqual(self.vulns[1].findtext("STATUS"), "NotAFinding")
        self.assertEqual(self.vulns[1].findtext("SEVERITY_OVERRIDE"), "")

    def test_low_severity(self):
        """CAT III is written as 'low'."""
        self.assertEqual(dict(self.attributes(self.vulns[1]))["Severity"], "low")


class TestCklRoundTrip(unittest.TestCase):
    """Test export → parse."""

    def test_deterministic(self):
        """Identical inputs produce identical text."""
        self.assertEqual(export_ckl(sample_stig(), "h"), export_ckl(sample_stig(), "h"))

    def test_export_ckl_for(self):
        """AssetInfo fills the host fields."""
        info = AssetInfo(hostname="db01", ip="10.1.1.1")
        self.assertEqual(export_ckl_for(sample_stig(), info), export_ckl(sample_stig(), "db01", "10.1.1.1"))

    def test_round_trip_sample_checklist(self):
        """Every modeled field survives parse → export → parse."""
        stig = parse_ckl(self.sample_ckl)
        again = parse_ckl(export_ckl(stig, "TEST-SERVER", "192.168.1.100"))
        self.assertEqual(again, stig)

    def test_round_trip_escaped_content(self):
        """Special characters survive the round trip."""
        stig = sample_stig()
        again = parse_ckl(export_ckl(stig))
        self.assertEqual(again.title, stig.title)
        self.assertEqual(again.rules[0].title, "Use <strong> crypto")
        self.assertEqual(again.rules[0].cci_ids, ("CCI-000366", "CCI-000196"))
        self.assertEqual(again.rules[0].status, Status.OPEN)


if __name__ == "__main__":
    unittest.main()
