"""
Record stream processing.

Components:
- RecordProcessor: runs a report filter over a stream of records
"""

from .record_processor import RecordProcessor

__all__ = ['RecordProcessor']
