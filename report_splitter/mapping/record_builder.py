"""
Output record construction and field coercion.

Every derived record starts from an immutable copy of the input record's
pass-through fields; the builder layers the node-specific fields on top and
produces a new OutputRecord. Input records are never modified.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

from ..exceptions import DataTransformationError
from ..models import DataType, FieldMapping, OutputRecord, ParsedNode
from ..utils import ValidationUtils


def coerce_value(raw: Optional[str], data_type: str) -> Any:
    """
    Coerce a raw attribute value to its mapped type.

    Numeric coercions never fail: absent or unparsable text becomes zero.
    Strings are copied as-is, including None for absent attributes.

    Args:
        raw: Attribute value or node text (None when absent)
        data_type: DataType value ('string', 'integer', 'float', 'percentage')

    Returns:
        Coerced value

    Raises:
        DataTransformationError: If data_type is unknown. Loaded contracts are
            validated up front, so only direct callers can hit this.
    """
    if data_type == DataType.STRING.value:
        return raw
    if data_type == DataType.INTEGER.value:
        return ValidationUtils.safe_int_conversion(raw, 0)
    if data_type == DataType.FLOAT.value:
        return ValidationUtils.safe_float_conversion(raw, 0.0)
    if data_type == DataType.PERCENTAGE.value:
        return ValidationUtils.safe_float_conversion(raw, 0.0) * 100
    raise DataTransformationError(f"Unsupported data type: {data_type}",
                                  source_value=raw, target_type=data_type)


def pass_through_fields(record: Mapping[str, Any], source: str) -> Mapping[str, Any]:
    """Immutable copy of a record without its source field."""
    return MappingProxyType({key: value for key, value in record.items() if key != source})


def tag_record(record: Mapping[str, Any], tag: str) -> OutputRecord:
    """
    Return a copy of a record with a tag appended to its 'tags' list.

    An existing scalar 'tags' value is kept as the first tag.
    """
    data = dict(record)
    tags = data.get('tags')
    if tags is None:
        tags = []
    elif isinstance(tags, (list, tuple)):
        tags = list(tags)
    else:
        tags = [tags]
    if tag not in tags:
        tags.append(tag)
    data['tags'] = tags
    return OutputRecord(data)


class RecordBuilder:
    """
    Builds one OutputRecord on top of shared pass-through fields.

    Usage:
        builder = RecordBuilder(base, 'cobertura_class', node)
        builder.apply_mappings(node, level.fields)
        builder.update(linkage)
        record = builder.build()
    """

    def __init__(self, base: Mapping[str, Any], record_type: str, node: ParsedNode):
        self._fields: Dict[str, Any] = dict(base)
        self._fields['type'] = record_type
        self._fields['message'] = node.markup

    def apply_mappings(self, node: ParsedNode, mappings: Iterable[FieldMapping]) -> 'RecordBuilder':
        for mapping in mappings:
            raw = node.text if mapping.from_text else node.get(mapping.xml_attribute)
            self._fields[mapping.target_field] = coerce_value(raw, mapping.data_type)
        return self

    def set(self, field_name: str, value: Any) -> 'RecordBuilder':
        self._fields[field_name] = value
        return self

    def update(self, values: Mapping[str, Any]) -> 'RecordBuilder':
        self._fields.update(values)
        return self

    def get(self, field_name: str, default: Any = None) -> Any:
        return self._fields.get(field_name, default)

    def build(self) -> OutputRecord:
        return OutputRecord(self._fields)
