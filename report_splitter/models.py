"""
Core data models for the report splitter.

This module defines the primary data structures used throughout the system:
mapping contracts and their levels, the immutable parsed node tree, output
records, and the results handed back to the host pipeline.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


class DataType(Enum):
    """Supported coercions for mapped fields."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    PERCENTAGE = "percentage"


class AnomalyPolicy(Enum):
    """What the tree walker does when a grouping node turns out to be empty."""
    ABORT_REMAINING = "abort_remaining"
    SKIP_BRANCH = "skip_branch"


class DecodeStatus(Enum):
    """Outcome of decoding the source field of a record."""
    DECODED = "decoded"
    MISSING_SOURCE = "missing_source"
    MULTI_VALUED = "multi_valued"
    EMPTY = "empty"


class FilterStatus(Enum):
    """Outcome of running a report filter over one record."""
    SPLIT = "split"
    SKIPPED = "skipped"
    NO_MATCH = "no_match"
    PARSE_FAILURE = "parse_failure"


@dataclass
class FieldMapping:
    """
    Defines how an XML attribute (or the node text) maps to an output field.

    Attributes:
        target_field: Name of the field on the output record
        data_type: Coercion applied to the raw value (see DataType)
        xml_attribute: Attribute to read; mutually exclusive with from_text
        from_text: Read the node's concatenated text instead of an attribute
    """
    target_field: str
    data_type: str = DataType.STRING.value
    xml_attribute: Optional[str] = None
    from_text: bool = False

    def __post_init__(self):
        """Validate field mapping configuration."""
        if not self.target_field:
            raise ValueError("target_field cannot be empty")
        if self.xml_attribute is None and not self.from_text:
            raise ValueError(f"Field '{self.target_field}' needs xml_attribute or from_text")
        if self.xml_attribute is not None and self.from_text:
            raise ValueError(f"Field '{self.target_field}' cannot use both xml_attribute and from_text")


@dataclass
class EnricherSpec:
    """Named enricher applied to a level's record, with its options."""
    name: str
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("enricher name cannot be empty")


@dataclass
class LevelMapping:
    """
    One level of a contract's descent plan.

    Attributes:
        name: Level name (e.g. 'package')
        record_type: Value written to the output record's 'type' field
        paths: Element paths relative to the parent node; the first that matches wins
        fields: Field mappings applied to every matched node
        guid_field: Field receiving a freshly generated identifier, if any
        inherit: Fields of this level's record copied onto every descendant record
        within_first_child: Look the paths up under the parent's first child element
        requires_children: A matched node without child elements is a structural anomaly
        enrichers: Schema-specific enrichers run after the field mappings
        children: Nested levels, walked in declaration order
    """
    name: str
    record_type: str
    paths: List[str]
    fields: List[FieldMapping] = field(default_factory=list)
    guid_field: Optional[str] = None
    inherit: List[str] = field(default_factory=list)
    within_first_child: bool = False
    requires_children: bool = False
    enrichers: List[EnricherSpec] = field(default_factory=list)
    children: List['LevelMapping'] = field(default_factory=list)

    def __post_init__(self):
        """Validate level configuration."""
        if not self.name:
            raise ValueError("level name cannot be empty")
        if not self.record_type:
            raise ValueError(f"Level '{self.name}' needs a record_type")
        if not self.paths:
            raise ValueError(f"Level '{self.name}' needs at least one path")

    def iter_levels(self) -> Iterator['LevelMapping']:
        """Yield this level and every nested level, depth first."""
        yield self
        for child in self.children:
            yield from child.iter_levels()


@dataclass
class MappingContract:
    """
    Complete mapping contract describing how one report schema decomposes.

    Attributes:
        name: Contract name (e.g. 'cobertura')
        root: Root level of the descent plan, looked up from the document node
        description: Optional human-readable description
        failure_tag: Tag added to a record whose source field is not well-formed XML
    """
    name: str
    root: LevelMapping
    description: Optional[str] = None
    failure_tag: str = "_xmlparsefailure"

    def __post_init__(self):
        """Validate mapping contract configuration."""
        if not self.name:
            raise ValueError("contract name cannot be empty")
        if self.root is None:
            raise ValueError("contract root level must be specified")

    def levels(self) -> List[LevelMapping]:
        return list(self.root.iter_levels())


@dataclass(frozen=True)
class ParsedNode:
    """
    Immutable element of a parsed report.

    Attributes:
        tag: Element name ('#document' for the synthetic document node)
        attributes: Attribute name/value pairs in document order
        children: Child elements in document order
        text: Concatenated text content of the element and its descendants
        markup: Serialized XML of the element's subtree
    """
    tag: str
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Tuple['ParsedNode', ...] = ()
    text: str = ""
    markup: str = ""

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for key, value in self.attributes:
            if key == name:
                return value
        return default

    @property
    def attrib(self) -> Dict[str, str]:
        return dict(self.attributes)

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator['ParsedNode']:
        return iter(self.children)

    def __bool__(self) -> bool:
        # A node without children is still a node.
        return True


class OutputRecord(Mapping):
    """Immutable flat record emitted for one matched node."""

    __slots__ = ('_data',)

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"OutputRecord({self._data!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Return a mutable copy of the record's fields."""
        return dict(self._data)


@dataclass
class DecodeResult:
    """Result of decoding a record's source field."""
    status: DecodeStatus
    text: Optional[str] = None

    @property
    def is_decoded(self) -> bool:
        return self.status is DecodeStatus.DECODED


@dataclass
class FilterResult:
    """
    Outcome of one filter invocation.

    Attributes:
        status: What happened to the record
        records: Records to emit, in emission order
        cancel_original: The original record is superseded by the emitted ones
    """
    status: FilterStatus
    records: List[OutputRecord] = field(default_factory=list)
    cancel_original: bool = False

    @property
    def matched(self) -> bool:
        return self.status is FilterStatus.SPLIT and bool(self.records)


@dataclass
class ProcessingResult:
    """
    Results from running a filter over a stream of records.

    Attributes:
        records_processed: Total number of input records seen
        records_split: Input records replaced by derived records
        records_skipped: Input records passed through unchanged
        records_failed: Input records tagged as parse failures
        records_emitted: Total output records written
        processing_time_seconds: Total processing time
        errors: Error messages encountered
    """
    records_processed: int = 0
    records_split: int = 0
    records_skipped: int = 0
    records_failed: int = 0
    records_emitted: int = 0
    processing_time_seconds: float = 0.0
    errors: List[str] = None

    def __post_init__(self):
        """Initialize default values for mutable fields."""
        if self.errors is None:
            self.errors = []

    @property
    def success_rate(self) -> float:
        """Calculate the share of records that were split, as a percentage."""
        if self.records_processed == 0:
            return 0.0
        return (self.records_split / self.records_processed) * 100.0
