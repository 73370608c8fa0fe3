"""
Abstract interfaces for the report splitter.

This module defines the contracts that the system components implement
so that parsers, filters and configuration sources can be swapped in tests
and by host pipelines.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from .models import FilterResult, MappingContract, OutputRecord, ParsedNode, ProcessingResult


class XMLParserInterface(ABC):
    """Abstract interface for XML parsing components."""

    @abstractmethod
    def parse(self, xml_content: str) -> ParsedNode:
        """
        Parse XML content into an immutable node tree.

        Args:
            xml_content: Normalized XML content as string

        Returns:
            Synthetic document node whose only child is the document element

        Raises:
            XMLParsingError: If XML is malformed or cannot be parsed
        """
        pass

    @abstractmethod
    def validate_xml_structure(self, xml_content: str) -> bool:
        """
        Check whether XML content is well-formed without building a tree.

        Args:
            xml_content: Raw XML content to validate

        Returns:
            True if XML is well-formed, False otherwise
        """
        pass


class ReportFilterInterface(ABC):
    """Abstract interface for record filters that decompose an embedded report."""

    @abstractmethod
    def filter(self, record: Mapping[str, Any],
               emit: Optional[Callable[[OutputRecord], None]] = None) -> FilterResult:
        """
        Decompose the report embedded in one record.

        Args:
            record: Input record from the host pipeline
            emit: Optional callback receiving every output record in emission order

        Returns:
            FilterResult describing the emitted records and the original's fate
        """
        pass


class ConfigurationManagerInterface(ABC):
    """Abstract interface for configuration management components."""

    @abstractmethod
    def load_mapping_contract(self, contract_path: str) -> MappingContract:
        """
        Load mapping contract from file or packaged contract name.

        Args:
            contract_path: Path to mapping contract file, or a packaged contract name

        Returns:
            Loaded and validated mapping contract
        """
        pass


class RecordProcessorInterface(ABC):
    """Abstract interface for strategies that run a filter over a record stream."""

    @abstractmethod
    def process(self, records: Iterable[Mapping[str, Any]]) -> Iterator[dict]:
        """
        Run the filter over every record and yield the resulting output records.

        Args:
            records: Input records in pipeline order

        Returns:
            Iterator over output records as plain dictionaries
        """
        pass

    @abstractmethod
    def get_result(self) -> ProcessingResult:
        """Return the statistics accumulated so far."""
        pass
