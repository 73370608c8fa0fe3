"""
Report Splitter

A contract-driven engine that decomposes base64-encoded XML reports (Cobertura
coverage, JUnit test results) embedded in pipeline records into flat, linked
records, one per meaningful node of the report.
"""

__version__ = "1.0.0"

# Import core models and interfaces for easy access
from .models import (
    AnomalyPolicy,
    DataType,
    FieldMapping,
    FilterResult,
    FilterStatus,
    LevelMapping,
    MappingContract,
    OutputRecord,
    ParsedNode,
    ProcessingResult,
)

from .interfaces import (
    ConfigurationManagerInterface,
    RecordProcessorInterface,
    ReportFilterInterface,
    XMLParserInterface,
)

from .exceptions import (
    ConfigurationError,
    DataTransformationError,
    MappingContractError,
    ReportSplitterError,
    StructuralAnomalyError,
    XMLParsingError,
)

from .filters import CoberturaFilter, JunitFilter, ReportFilter, build_filter

__all__ = [
    # Core models
    "AnomalyPolicy",
    "DataType",
    "FieldMapping",
    "FilterResult",
    "FilterStatus",
    "LevelMapping",
    "MappingContract",
    "OutputRecord",
    "ParsedNode",
    "ProcessingResult",

    # Interfaces
    "ConfigurationManagerInterface",
    "RecordProcessorInterface",
    "ReportFilterInterface",
    "XMLParserInterface",

    # Exceptions
    "ConfigurationError",
    "DataTransformationError",
    "MappingContractError",
    "ReportSplitterError",
    "StructuralAnomalyError",
    "XMLParsingError",

    # Filters
    "CoberturaFilter",
    "JunitFilter",
    "ReportFilter",
    "build_filter",
]
