"""Source field decoding."""

from .source_decoder import SourceDecoder

__all__ = ['SourceDecoder']
