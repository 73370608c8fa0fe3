"""
Tests for the indexed_text and testcase_result enrichers.
"""

import pytest

from report_splitter.exceptions import MappingContractError
from report_splitter.mapping.enrichers import get_enricher, indexed_text
from report_splitter.mapping.enrichers import testcase_result as classify_testcase
from report_splitter.mapping.record_builder import RecordBuilder
from report_splitter.parsing.xml_parser import XMLParser


def element(xml):
    return XMLParser().parse(xml).children[0]


def enrich(enricher, node, options):
    builder = RecordBuilder({}, 'test', node)
    enricher(builder, node, options)
    return builder.build()


class TestIndexedText:

    def test_numbers_sources_from_one(self):
        node = element('<coverage><sources><source>/src/a</source><source>/src/b</source></sources></coverage>')
        record = enrich(indexed_text, node, {'path': 'sources/source', 'prefix': 'coverage_source'})
        assert record['coverage_source1'] == '/src/a'
        assert record['coverage_source2'] == '/src/b'
        assert 'coverage_source3' not in record

    def test_no_sources_adds_nothing(self):
        record = enrich(indexed_text, element('<coverage/>'), {'path': 'sources/source', 'prefix': 'coverage_source'})
        assert not any(key.startswith('coverage_source') for key in record)

    def test_numbering_restarts_per_node(self):
        options = {'path': 'sources/source', 'prefix': 's'}
        first = enrich(indexed_text, element('<c><sources><source>a</source></sources></c>'), options)
        second = enrich(indexed_text, element('<c><sources><source>b</source></sources></c>'), options)
        assert first['s1'] == 'a'
        assert second['s1'] == 'b'


class TestTestcaseResult:

    options = {'prefix': 'testcase_result'}

    def test_no_children_is_success(self):
        record = enrich(classify_testcase, element('<testcase name="t1"/>'), self.options)
        assert record['testcase_result'] == 'success'
        assert 'testcase_result_type' not in record

    def test_single_child(self):
        node = element('<testcase name="t1"><failure type="AssertionError" message="boom">trace</failure></testcase>')
        record = enrich(classify_testcase, node, self.options)
        assert record['testcase_result'] == 'failure'
        assert record['testcase_result_type'] == 'AssertionError'
        assert record['testcase_result_message'] == 'boom'
        assert record['testcase_result_content'] == 'trace'

    def test_single_child_without_attributes(self):
        record = enrich(classify_testcase, element('<testcase><skipped/></testcase>'), self.options)
        assert record['testcase_result'] == 'skipped'
        assert record['testcase_result_type'] is None
        assert record['testcase_result_message'] is None
        assert record['testcase_result_content'] == ''

    def test_several_children_are_numbered(self):
        node = element(
            '<testcase><failure type="AssertionError" message="boom">trace</failure>'
            '<system-out>log line</system-out></testcase>'
        )
        record = enrich(classify_testcase, node, self.options)
        assert record['testcase_result'] == 'various'
        assert record['testcase_result1'] == 'failure'
        assert record['testcase_result1_type'] == 'AssertionError'
        assert record['testcase_result1_message'] == 'boom'
        assert record['testcase_result1_content'] == 'trace'
        assert record['testcase_result2'] == 'system-out'
        assert record['testcase_result2_type'] is None
        assert record['testcase_result2_content'] == 'log line'
        assert 'testcase_result_type' not in record


def test_unknown_enricher_is_a_contract_error():
    with pytest.raises(MappingContractError):
        get_enricher('does_not_exist')
