"""Optional dependency detection and XML parser management."""

from __future__ import annotations
from contextlib import suppress


class Deps:
    """Optional dependency detection."""

    HAS_DEFUSEDXML = False
    _warned = False

    @classmethod
    def check(cls) -> None:
        """Check for available optional dependencies."""
        with suppress(Exception):
            from defusedxml import ElementTree as DET

            DET.fromstring("<test/>")
            cls.HAS_DEFUSEDXML = True

    @classmethod
    def get_xml(cls):
        """Get XML parser (preferring defusedxml for security)."""
        if cls.HAS_DEFUSEDXML:
            from defusedxml import ElementTree as ET
            from defusedxml.ElementTree import ParseError as XMLParseError
        else:
            import xml.etree.ElementTree as ET  # noqa: N813
            from xml.etree.ElementTree import ParseError as XMLParseError

            cls.warn_if_unsafe()

        return ET, XMLParseError

    @classmethod
    def rejected_errors(cls):
        """Exception types raised for documents the parser refuses outright."""
        if cls.HAS_DEFUSEDXML:
            from defusedxml import DefusedXmlException

            return (DefusedXmlException,)
        return ()

    @classmethod
    def warn_if_unsafe(cls) -> None:
        """Warn once if defusedxml is not available (security risk)."""
        if cls.HAS_DEFUSEDXML or cls._warned:
            return
        cls._warned = True

        from stig_viewer.core.logging import LOG

        LOG.w(
            "defusedxml not installed: using the standard library XML parser, "
            "which is vulnerable to entity expansion attacks. "
            "Install with: pip install defusedxml"
        )


# Automatically check dependencies on import
Deps.check()
