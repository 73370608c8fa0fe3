"""
Tests for SourceDecoder - skip paths, lenient base64 and whitespace normalization.
"""

import logging

import pytest

from report_splitter.decoding.source_decoder import SourceDecoder
from report_splitter.models import DecodeStatus


class TestSourceDecoder:
    """Test suite for decoding the source field of a record."""

    @pytest.fixture
    def decoder(self):
        return SourceDecoder('message')

    # ============================================================================
    # Skip paths
    # ============================================================================

    def test_missing_source_field_is_skipped(self, decoder):
        result = decoder.decode({'host': 'ci-01'})
        assert result.status is DecodeStatus.MISSING_SOURCE
        assert result.text is None

    def test_multi_valued_source_is_skipped_with_warning(self, decoder, encode_report, caplog):
        record = {'message': [encode_report('<a/>'), encode_report('<b/>')]}

        with caplog.at_level(logging.WARNING, logger='report_splitter.decoding.source_decoder'):
            result = decoder.decode(record)

        assert result.status is DecodeStatus.MULTI_VALUED
        assert "only works on fields of length 1" in caplog.text

    def test_single_element_list_is_unwrapped(self, decoder, encode_report):
        result = decoder.decode({'message': [encode_report('<a/>')]})
        assert result.status is DecodeStatus.DECODED
        assert result.text == '<a/>'

    def test_blank_document_is_skipped(self, decoder, encode_report):
        result = decoder.decode({'message': encode_report('   ')})
        assert result.status is DecodeStatus.EMPTY

    def test_none_value_is_skipped(self, decoder):
        assert decoder.decode({'message': None}).status is DecodeStatus.EMPTY

    # ============================================================================
    # Decoding and normalization
    # ============================================================================

    def test_whitespace_between_tags_is_removed(self, decoder, encode_report):
        xml = '<a>\n  <b>keep  this</b>\n\t<c/>\n</a>'
        result = decoder.decode({'message': encode_report(xml)})
        assert result.text == '<a><b>keep  this</b><c/></a>'

    def test_missing_padding_is_tolerated(self, decoder, encode_report):
        encoded = encode_report('<a/>').rstrip('=')
        assert decoder.decode({'message': encoded}).text == '<a/>'

    def test_line_breaks_inside_base64_are_ignored(self, decoder, encode_report):
        encoded = encode_report('<report name="x"/>')
        wrapped = encoded[:8] + '\n' + encoded[8:]
        assert decoder.decode({'message': wrapped}).text == '<report name="x"/>'

    def test_bytes_value_is_decoded(self, decoder, encode_report):
        result = decoder.decode({'message': encode_report('<a/>').encode('ascii')})
        assert result.text == '<a/>'

    def test_utf8_content_survives(self, decoder, encode_report):
        result = decoder.decode({'message': encode_report('<a name="Größe"/>')})
        assert result.text == '<a name="Größe"/>'

    def test_record_is_not_modified(self, decoder, encode_report):
        record = {'message': encode_report('<a/>'), 'host': 'ci-01'}
        snapshot = dict(record)
        decoder.decode(record)
        assert record == snapshot
