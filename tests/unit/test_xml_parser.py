"""
Tests for XMLParser - ParsedNode tree construction and fail-fast behavior.
"""

import pytest

from report_splitter.exceptions import XMLParsingError
from report_splitter.parsing.xml_parser import DOCUMENT_TAG, XMLParser


@pytest.fixture
def parser():
    return XMLParser()


class TestParse:

    def test_document_node_wraps_root_element(self, parser):
        document = parser.parse('<coverage version="1"><packages/></coverage>')

        assert document.tag == DOCUMENT_TAG
        assert len(document.children) == 1
        assert document.children[0].tag == 'coverage'
        assert document.markup == '<coverage version="1"><packages/></coverage>'

    def test_attributes_keep_document_order(self, parser):
        root = parser.parse('<class name="C" filename="C.java" line-rate="1.0"/>').children[0]

        assert root.attributes == (('name', 'C'), ('filename', 'C.java'), ('line-rate', '1.0'))
        assert root.get('filename') == 'C.java'
        assert root.get('missing') is None
        assert root.attrib == {'name': 'C', 'filename': 'C.java', 'line-rate': '1.0'}

    def test_text_is_concatenated_over_descendants(self, parser):
        root = parser.parse('<failure>at <b>line</b> 12</failure>').children[0]
        assert root.text == 'at line 12'

    def test_markup_is_the_serialized_subtree(self, parser):
        document = parser.parse('<classes><class name="C"><methods/></class></classes>')
        class_node = document.children[0].children[0]
        assert class_node.markup == '<class name="C"><methods/></class>'

    def test_comments_and_processing_instructions_are_not_nodes(self, parser):
        root = parser.parse('<a><!-- note --><?pi data?><b/></a>').children[0]
        assert [child.tag for child in root.children] == ['b']

    def test_namespaces_are_stripped(self, parser):
        root = parser.parse('<t:suite xmlns:t="urn:test" t:name="S"/>').children[0]
        assert root.tag == 'suite'
        assert root.get('name') == 'S'

    def test_xml_declaration_and_bom_are_accepted(self, parser):
        document = parser.parse('\ufeff<?xml version="1.0" encoding="UTF-8"?><testsuite name="S"/>')
        assert document.children[0].get('name') == 'S'

    def test_nodes_are_immutable(self, parser):
        root = parser.parse('<a x="1"/>').children[0]
        with pytest.raises(AttributeError):
            root.tag = 'b'


class TestParseFailures:

    @pytest.mark.parametrize("xml", [
        '<coverage><broken',
        '<a></b>',
        'not xml at all',
        '<a/><b/>',
    ])
    def test_malformed_xml_raises(self, parser, xml):
        with pytest.raises(XMLParsingError):
            parser.parse(xml)

    def test_empty_content_raises(self, parser):
        with pytest.raises(XMLParsingError):
            parser.parse('   ')

    def test_error_keeps_truncated_content(self, parser):
        xml = '<a>' + 'x' * 600
        with pytest.raises(XMLParsingError) as excinfo:
            parser.parse(xml)
        assert excinfo.value.xml_content.endswith('...')
        assert len(excinfo.value.xml_content) == 503


class TestValidateXmlStructure:

    def test_well_formed(self, parser):
        assert parser.validate_xml_structure('<a><b/></a>') is True

    def test_malformed(self, parser):
        assert parser.validate_xml_structure('<a><b></a>') is False

    def test_empty(self, parser):
        assert parser.validate_xml_structure('') is False
