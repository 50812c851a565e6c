"""
Pytest configuration and shared fixtures for STIG Viewer tests.

This module provides:
- Sample XCCDF and CKL documents (as fixtures, and attached to
  ``unittest.TestCase`` classes as ``self.sample_xccdf`` / ``self.sample_ckl``)
- Temporary file/directory management
- An isolated application home so tests never write to the real one
- Custom markers
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest


SAMPLE_XCCDF = """<?xml version="1.0" encoding="UTF-8"?>
<Benchmark xmlns="http://checklists.nist.gov/xccdf/1.1"
           xmlns:dc="http://purl.org/dc/elements/1.1/"
           id="Test_App_STIG">
    <status date="2025-01-01">accepted</status>
    <title>DPMS Target Test Application Security</title>
    <description>Sample benchmark for testing</description>
    <plain-text id="release-info">Release: 3 Benchmark Date: 01 Jan 2025</plain-text>
    <version>2</version>
    <Group id="V-1001">
        <title>SRG-APP-000171</title>
        <Rule id="SV-1001r1_rule" severity="high" weight="10.0">
            <version>APP-00-000100</version>
            <title>Passwords must be stored as salted hashes.</title>
            <description>&lt;VulnDiscussion&gt;Store   hashes only.&lt;/VulnDiscussion&gt;&lt;FalsePositives&gt;&lt;/FalsePositives&gt;&lt;Mitigations&gt;Use a vault.&lt;/Mitigations&gt;&lt;IAControls&gt;&lt;/IAControls&gt;</description>
            <ident system="http://cyber.mil/cci">CCI-000196</ident>
            <ident system="http://cyber.mil/cci">CCI-000366</ident>
            <fixtext fixref="F-1001r1_fix">Configure the password store to use salted hashes.</fixtext>
            <fix id="F-1001r1_fix" />
            <check system="C-1001r1_chk">
                <check-content-ref href="Test_App_STIG.xml" name="M" />
                <check-content>Verify passwords are stored as salted hashes.</check-content>
            </check>
        </Rule>
    </Group>
    <Group id="V-1002">
        <title>SRG-APP-000172</title>
        <Rule id="SV-1002r2_rule" severity="low" weight="10.0">
            <version>APP-00-000110</version>
            <title>Session cookies must be marked secure.</title>
            <description>&lt;VulnDiscussion&gt;Cookies over TLS only.&lt;/VulnDiscussion&gt;</description>
            <ident system="http://cyber.mil/cci">CCI-001184</ident>
            <fixtext fixref="F-1002r2_fix">Set the Secure flag on session cookies.</fixtext>
            <check system="C-1002r2_chk">
                <check-content>Inspect the Set-Cookie header.</check-content>
            </check>
        </Rule>
    </Group>
    <Group id="V-1003">
        <title>Group without a rule</title>
    </Group>
    <Group>
        <title>SRG-APP-000174</title>
        <Rule severity="catastrophic">
            <title>Rule without identifiers</title>
        </Rule>
    </Group>
</Benchmark>"""


SAMPLE_CKL = """<?xml version="1.0" encoding="UTF-8"?>
<!--DISA STIG Viewer :: 2.18-->
<CHECKLIST>
    <ASSET>
        <ROLE>Member Server</ROLE>
        <ASSET_TYPE>Computing</ASSET_TYPE>
        <MARKING>CUI</MARKING>
        <HOST_NAME>TEST-SERVER</HOST_NAME>
        <HOST_IP>192.168.1.100</HOST_IP>
        <HOST_MAC>00:11:22:33:44:55</HOST_MAC>
        <HOST_FQDN>test-server.example.com</HOST_FQDN>
        <TARGET_COMMENT></TARGET_COMMENT>
        <TECH_AREA></TECH_AREA>
        <TARGET_KEY>1234</TARGET_KEY>
        <WEB_OR_DATABASE>false</WEB_OR_DATABASE>
        <WEB_DB_SITE></WEB_DB_SITE>
        <WEB_DB_INSTANCE></WEB_DB_INSTANCE>
    </ASSET>
    <STIGS>
        <iSTIG>
            <STIG_INFO>
                <SI_DATA>
                    <SID_NAME>version</SID_NAME>
                    <SID_DATA>1</SID_DATA>
                </SI_DATA>
                <SI_DATA>
                    <SID_NAME>stigid</SID_NAME>
                    <SID_DATA>Test_App_STIG</SID_DATA>
                </SI_DATA>
                <SI_DATA>
                    <SID_NAME>releaseinfo</SID_NAME>
                    <SID_DATA>Release: 1 Benchmark Date: 01 Jan 2025</SID_DATA>
                </SI_DATA>
                <SI_DATA>
                    <SID_NAME>title</SID_NAME>
                    <SID_DATA>Test Application Security</SID_DATA>
                </SI_DATA>
            </STIG_INFO>
            <VULN>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Vuln_Num</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>V-1001</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Severity</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>high</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Group_Title</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>SRG-APP-000171</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Rule_ID</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>SV-1001r1_rule</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Rule_Title</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Passwords must be stored as salted hashes.</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Vuln_Discuss</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Store hashes only.</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Check_Content</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Verify passwords are stored as salted hashes.</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Fix_Text</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Configure the password store to use salted hashes.</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>CCI_REF</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>CCI-000196</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>CCI_REF</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>CCI-000366</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STATUS>Open</STATUS>
                <FINDING_DETAILS>Plaintext passwords found in users table.</FINDING_DETAILS>
                <COMMENTS>Ticket 42 &amp; follow-up</COMMENTS>
                <SEVERITY_OVERRIDE></SEVERITY_OVERRIDE>
                <SEVERITY_JUSTIFICATION></SEVERITY_JUSTIFICATION>
            </VULN>
            <VULN>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Vuln_Num</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>V-1002</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Severity</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>low</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Rule_ID</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>SV-1002r2_rule</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Rule_Title</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Session cookies must be marked secure.</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Fix_Text</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Set the Secure flag on session cookies.</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>CCI_REF</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>CCI-001184</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STATUS>NotAFinding</STATUS>
                <FINDING_DETAILS>Secure flag present.</FINDING_DETAILS>
                <COMMENTS></COMMENTS>
                <SEVERITY_OVERRIDE></SEVERITY_OVERRIDE>
                <SEVERITY_JUSTIFICATION></SEVERITY_JUSTIFICATION>
            </VULN>
            <VULN>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Vuln_Num</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>V-1003</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Severity</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>MEDIUM</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Rule_ID</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>SV-1003r1_rule</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Rule_Title</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Audit records must include user identity.</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>STIGRef</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Test Application Security :: Version 1, Release: 1</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STATUS>Not_Reviewed</STATUS>
                <FINDING_DETAILS></FINDING_DETAILS>
                <COMMENTS></COMMENTS>
                <SEVERITY_OVERRIDE></SEVERITY_OVERRIDE>
                <SEVERITY_JUSTIFICATION></SEVERITY_JUSTIFICATION>
            </VULN>
            <VULN>
                <STIG_DATA>
                    <VULN_ATTRIBUTE>Rule_Title</VULN_ATTRIBUTE>
                    <ATTRIBUTE_DATA>Legacy item without identifiers</ATTRIBUTE_DATA>
                </STIG_DATA>
                <STATUS>Not_Applicable</STATUS>
                <FINDING_DETAILS></FINDING_DETAILS>
                <COMMENTS>Component not installed.</COMMENTS>
                <SEVERITY_OVERRIDE></SEVERITY_OVERRIDE>
                <SEVERITY_JUSTIFICATION></SEVERITY_JUSTIFICATION>
            </VULN>
        </iSTIG>
    </STIGS>
</CHECKLIST>"""


# ============================================================================
# Test Data Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp(prefix="stig_test_"))
    try:
        yield tmp
    finally:
        if tmp.exists():
            shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_xccdf_content() -> str:
    """Sample XCCDF benchmark (namespaced, DISA layout)."""
    return SAMPLE_XCCDF


@pytest.fixture
def sample_ckl_content() -> str:
    """Sample CKL checklist with one VULN per status."""
    return SAMPLE_CKL


@pytest.fixture
def sample_xccdf_file(temp_dir: Path, sample_xccdf_content: str) -> Path:
    """Write the sample XCCDF to a temporary file."""
    xccdf_file = temp_dir / "test_benchmark.xml"
    xccdf_file.write_text(sample_xccdf_content, encoding="utf-8")
    return xccdf_file


@pytest.fixture
def sample_ckl_file(temp_dir: Path, sample_ckl_content: str) -> Path:
    """Write the sample CKL to a temporary file."""
    ckl_file = temp_dir / "test_checklist.ckl"
    ckl_file.write_text(sample_ckl_content, encoding="utf-8")
    return ckl_file


@pytest.fixture(autouse=True, scope="class")
def sample_documents(request):
    """Expose the sample documents to ``unittest.TestCase`` classes."""
    if request.cls is not None:
        request.cls.sample_xccdf = SAMPLE_XCCDF
        request.cls.sample_ckl = SAMPLE_CKL
    yield


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers and an isolated application home."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )

    home = Path(tempfile.mkdtemp(prefix="stig_viewer_home_"))
    os.environ["STIG_VIEWER_HOME"] = str(home)
    os.environ.pop("STIG_VIEWER_CCI_MAP", None)
    config._stig_viewer_home = home


def pytest_unconfigure(config):
    home = getattr(config, "_stig_viewer_home", None)
    if home is not None:
        shutil.rmtree(home, ignore_errors=True)
