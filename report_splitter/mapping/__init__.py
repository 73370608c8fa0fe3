"""Record building, coercion and schema-specific enrichers."""

from .enrichers import ENRICHERS, get_enricher
from .record_builder import RecordBuilder, coerce_value, pass_through_fields, tag_record

__all__ = ['ENRICHERS', 'RecordBuilder', 'coerce_value', 'get_enricher', 'pass_through_fields', 'tag_record']
