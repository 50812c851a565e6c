"""
STIG Viewer XML Utility Functions.

Element lookup, text extraction and escaping helpers shared by the XCCDF
and CKL parsers and the CKL serializer.
"""

from __future__ import annotations
import re
from typing import Any, Callable, Iterator, List, Optional, Sequence
from xml.etree.ElementTree import Element

from stig_viewer.core.constants import DISA_SECTION_TAGS
from stig_viewer.core.deps import Deps
from stig_viewer.exceptions import ParseError
from stig_viewer.xml.schema import Sch


_VULN_DISCUSSION = re.compile(r"</?VulnDiscussion>", re.IGNORECASE)
_DISA_SECTIONS = [
    re.compile(rf"<{tag}>.*?</{tag}>", re.IGNORECASE | re.DOTALL)
    for tag in DISA_SECTION_TAGS
]
_ANY_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


class XmlUtils:
    """
    Shared XML processing utilities.

    Provides:
    - Element lookup by exact tag with a namespace-agnostic fallback
    - First-non-empty accessor chains for permissive field lookup
    - Text content extraction across mixed content
    - XML escaping and DISA description cleaning

    Thread-safe: Yes (stateless utility class)
    """

    @staticmethod
    def parse(xml_text: str, kind: str = "XML") -> Element:
        """
        Parse XML text into its root element.

        Uses the parser chosen by ``Deps.get_xml()`` (defusedxml when
        installed). Leading byte-order marks and whitespace are ignored.

        Args:
            xml_text: Document text
            kind: Document kind named in error messages (e.g. "XCCDF")

        Returns:
            Root element

        Raises:
            ParseError: If the text is not well-formed XML or is rejected
                by the safe parser (entity declarations, external references)
        """
        ET, XMLParseError = Deps.get_xml()
        if isinstance(xml_text, bytes):
            xml_text = xml_text.decode("utf-8", errors="replace")
        text = (xml_text or "").lstrip("\ufeff \t\r\n")
        try:
            return ET.fromstring(text)
        except XMLParseError as exc:
            raise ParseError(f"Malformed {kind} document: {exc}", {"kind": kind}) from exc
        except Deps.rejected_errors() as exc:
            raise ParseError(f"Unsafe {kind} document rejected: {exc}", {"kind": kind}) from exc

    @staticmethod
    def _iter_exact(elem: Element, name: str, include_self: bool) -> Iterator[Element]:
        for node in elem.iter(name):
            if include_self or node is not elem:
                yield node

    @staticmethod
    def _iter_local(elem: Element, name: str, include_self: bool) -> Iterator[Element]:
        for node in elem.iter():
            if not include_self and node is elem:
                continue
            if isinstance(node.tag, str) and Sch.strip_ns(node.tag) == name:
                yield node

    @staticmethod
    def find_all(elem: Optional[Element], name: str, include_self: bool = False) -> List[Element]:
        """
        Find all descendants named ``name`` in document order.

        Un-namespaced tags are tried first; when none match, every element
        whose local name is ``name`` in any namespace is returned instead.

        Args:
            elem: Element to search under
            name: Tag name without namespace
            include_self: Whether ``elem`` itself may match

        Returns:
            Matching elements (possibly empty)
        """
        if elem is None:
            return []
        return XmlUtils.first_non_empty(
            lambda: list(XmlUtils._iter_exact(elem, name, include_self)),
            lambda: list(XmlUtils._iter_local(elem, name, include_self)),
            default=[],
        )

    @staticmethod
    def find_first(elem: Optional[Element], name: str, include_self: bool = False) -> Optional[Element]:
        """First descendant named ``name`` (exact tag, then any namespace)."""
        if elem is None:
            return None
        return XmlUtils.first_non_empty(
            lambda: next(XmlUtils._iter_exact(elem, name, include_self), None),
            lambda: next(XmlUtils._iter_local(elem, name, include_self), None),
        )

    @staticmethod
    def first_non_empty(*accessors: Callable[[], Any], default: Any = None) -> Any:
        """
        Call each accessor in order and return the first non-empty result.

        Example:
            >>> XmlUtils.first_non_empty(lambda: "", lambda: "x")
            'x'
        """
        for accessor in accessors:
            value = accessor()
            if value is None:
                continue
            # Elements define __len__ as child count, so only sequences count as empty
            if isinstance(value, (str, list, tuple)) and not value:
                continue
            return value
        return default

    @staticmethod
    def text_content(elem: Optional[Element]) -> str:
        """
        Trimmed text of ``elem`` and all of its descendants.

        Mirrors DOM ``textContent``: nested element text and tails are
        concatenated without separators, comments are ignored.
        """
        if elem is None:
            return ""
        return "".join(elem.itertext()).strip()

    @staticmethod
    def child_text(elem: Optional[Element], name: str) -> str:
        """Trimmed text content of the first descendant named ``name``."""
        return XmlUtils.text_content(XmlUtils.find_first(elem, name))

    @staticmethod
    def first_text(elem: Optional[Element], names: Sequence[str], default: str = "") -> str:
        """Text of the first of ``names`` that yields non-empty content."""
        return XmlUtils.first_non_empty(
            *(lambda n=n: XmlUtils.child_text(elem, n) for n in names),
            default=default,
        )

    @staticmethod
    def escape(value: Any) -> str:
        """
        Escape a value for XML text content (&, <, >, ", ').

        Returns:
            Escaped string, or empty string if value is None
        """
        if value is None:
            return ""
        return (
            str(value)
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;")
        )

    @staticmethod
    def clean_description(text: str, strip_sections: bool = True) -> str:
        """
        Flatten a DISA description to plain text.

        The ``VulnDiscussion`` wrapper is unwrapped, and with
        ``strip_sections`` the DISA subsections (FalsePositives,
        Mitigations, ...) are removed together with their content. Remaining
        tags become spaces and whitespace runs collapse to one space.

        Example:
            >>> XmlUtils.clean_description(
            ...     "<VulnDiscussion>Keep  this</VulnDiscussion><Mitigations>drop</Mitigations>"
            ... )
            'Keep this'
        """
        if not text:
            return ""
        text = _VULN_DISCUSSION.sub("", text)
        if strip_sections:
            for pattern in _DISA_SECTIONS:
                text = pattern.sub("", text)
        text = _ANY_TAG.sub(" ", text)
        return _WHITESPACE.sub(" ", text).strip()
