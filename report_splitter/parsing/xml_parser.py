"""
XML parsing engine for embedded report documents.

This module parses normalized report text with lxml and converts the result
into an immutable ParsedNode tree rooted at a synthetic document node. Parsing
is fail-fast: any syntax error is reported as XMLParsingError and no partial
tree is ever returned.
"""

import logging

from typing import Tuple

from lxml import etree

from ..exceptions import XMLParsingError
from ..interfaces import XMLParserInterface
from ..models import ParsedNode


DOCUMENT_TAG = "#document"


class XMLParser(XMLParserInterface):
    """
    Strict lxml-based parser producing ParsedNode trees.

    Each node keeps its serialized subtree (markup) so that every derived
    record can carry the exact XML it came from. Comments and processing
    instructions are not part of the node tree; namespace URIs are stripped
    from element and attribute names.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def _new_parser(self) -> etree.XMLParser:
        # lxml parsers are not thread-safe; one per call keeps parse() re-entrant.
        return etree.XMLParser(
            recover=False,
            strip_cdata=False,
            resolve_entities=False,  # Security: don't resolve external entities
            no_network=True,  # Security: disable network access
            remove_comments=True,
            remove_pis=True,
        )

    def parse(self, xml_content: str) -> ParsedNode:
        """
        Parse XML content into a ParsedNode tree.

        Args:
            xml_content: Normalized XML content as string

        Returns:
            Synthetic document node whose only child is the document element

        Raises:
            XMLParsingError: If XML is malformed or cannot be parsed
        """
        if not xml_content or not xml_content.strip():
            raise XMLParsingError("XML content is empty or None")

        cleaned_xml = self._clean_xml_content(xml_content)

        try:
            root = etree.fromstring(cleaned_xml.encode('utf-8'), self._new_parser())
        except etree.XMLSyntaxError as e:
            raise XMLParsingError(f"XML syntax error: {e}", xml_content)
        except ValueError as e:
            raise XMLParsingError(f"lxml parsing failed: {e}", xml_content)

        element = self._convert(root)
        self.logger.debug(f"Parsed XML document with root element <{element.tag}>")
        return ParsedNode(
            tag=DOCUMENT_TAG,
            children=(element,),
            text=element.text,
            markup=element.markup,
        )

    def validate_xml_structure(self, xml_content: str) -> bool:
        """
        Quick well-formedness check.

        Args:
            xml_content: Raw XML content to validate

        Returns:
            True if XML is well-formed, False otherwise
        """
        if not xml_content or not xml_content.strip():
            self.logger.warning("XML content is empty")
            return False

        try:
            etree.fromstring(self._clean_xml_content(xml_content).encode('utf-8'), self._new_parser())
        except (etree.XMLSyntaxError, ValueError) as e:
            self.logger.warning(f"XML well-formedness validation failed: {e}")
            return False
        return True

    def _clean_xml_content(self, xml_content: str) -> str:
        """Remove a leading BOM and surrounding whitespace."""
        if xml_content.startswith('\ufeff'):
            xml_content = xml_content[1:]
            self.logger.debug("Removed UTF-8 BOM from XML content")
        return xml_content.strip()

    def _convert(self, element) -> ParsedNode:
        """Convert an lxml element (and its element children) to a ParsedNode."""
        children = tuple(
            self._convert(child) for child in element
            if isinstance(child.tag, str)
        )
        return ParsedNode(
            tag=self._clean_tag_name(element.tag),
            attributes=self._extract_attributes(element),
            children=children,
            text=etree.tostring(element, method='text', encoding='unicode', with_tail=False),
            markup=etree.tostring(element, encoding='unicode', with_tail=False),
        )

    def _extract_attributes(self, element) -> Tuple[Tuple[str, str], ...]:
        return tuple(
            (self._clean_tag_name(name), value)
            for name, value in element.attrib.items()
        )

    @staticmethod
    def _clean_tag_name(tag: str) -> str:
        """
        Clean tag name by removing namespace prefixes.

        Args:
            tag: Raw tag name potentially with namespace ({uri}name)

        Returns:
            Clean tag name without namespace
        """
        if tag.startswith('{'):
            end_ns = tag.find('}')
            if end_ns > 0:
                return tag[end_ns + 1:]
        return tag
