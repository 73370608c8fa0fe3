"""
Decoder for the base64-encoded XML report held in a record's source field.

Decoding never raises for bad input: every outcome the pipeline must treat
differently is reported through a DecodeStatus.
"""

import base64
import binascii
import logging
import re
from typing import Any, Mapping

from ..models import DecodeResult, DecodeStatus


class SourceDecoder:
    """
    Extracts and normalizes the XML text of one record.

    Steps:
    - Missing source field: skip silently
    - Multi-valued source field: warn and skip
    - Lenient base64 decoding (unknown characters dropped, padding restored)
    - Whitespace between a closing and an opening bracket removed
    - Empty text after trimming: skip silently
    """

    _regex_cache = {
        'inter_tag_whitespace': re.compile(r'>\s+<'),
        'non_base64': re.compile(rb'[^A-Za-z0-9+/]'),
    }

    def __init__(self, source: str):
        """
        Args:
            source: Name of the record field holding the encoded report
        """
        self.source = source
        self.logger = logging.getLogger(__name__)

    def decode(self, record: Mapping[str, Any]) -> DecodeResult:
        """
        Decode the source field of a record.

        Args:
            record: Input record

        Returns:
            DecodeResult with the normalized text when status is DECODED
        """
        if self.source not in record:
            return DecodeResult(DecodeStatus.MISSING_SOURCE)

        value = record[self.source]
        if isinstance(value, (list, tuple)):
            if len(value) > 1:
                self.logger.warning(
                    f"XML filter only works on fields of length 1 "
                    f"(source={self.source}, values={len(value)})"
                )
                return DecodeResult(DecodeStatus.MULTI_VALUED)
            value = value[0] if value else ""

        text = self.normalize_whitespace(self.decode_base64(value))

        # Do nothing with an empty string.
        if not text.strip():
            return DecodeResult(DecodeStatus.EMPTY)

        return DecodeResult(DecodeStatus.DECODED, text)

    @classmethod
    def decode_base64(cls, value: Any) -> str:
        """
        Decode a base64 value the forgiving way: characters outside the
        alphabet are ignored and a truncated final quantum is padded.
        """
        if value is None:
            return ""
        if isinstance(value, str):
            value = value.encode('ascii', errors='ignore')
        elif not isinstance(value, (bytes, bytearray)):
            value = str(value).encode('ascii', errors='ignore')

        cleaned = cls._regex_cache['non_base64'].sub(b'', bytes(value))
        remainder = len(cleaned) % 4
        if remainder == 1:
            # A single dangling character carries no complete byte.
            cleaned = cleaned[:-1]
        elif remainder:
            cleaned += b'=' * (4 - remainder)

        try:
            raw = base64.b64decode(cleaned)
        except (binascii.Error, ValueError):
            return ""
        return raw.decode('utf-8', errors='replace')

    @classmethod
    def normalize_whitespace(cls, text: str) -> str:
        """Collapse whitespace runs between tags so they never become text nodes."""
        return cls._regex_cache['inter_tag_whitespace'].sub('><', text)
