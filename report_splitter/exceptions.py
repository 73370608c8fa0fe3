"""
Custom exceptions for the report splitter.

This module defines specific exception types for the error conditions
that can occur while decoding, parsing and decomposing XML reports.
"""


class ReportSplitterError(Exception):
    """Base exception for all report splitting related errors."""
    pass


class XMLParsingError(ReportSplitterError):
    """Exception raised when XML parsing fails."""

    def __init__(self, message: str, xml_content: str = None):
        """
        Initialize XML parsing error.

        Args:
            message: Error description
            xml_content: Optional XML content that failed to parse (truncated for logging)
        """
        super().__init__(message)
        # Store truncated XML content for debugging (first 500 chars)
        self.xml_content = xml_content[:500] + "..." if xml_content and len(xml_content) > 500 else xml_content


class MappingContractError(ReportSplitterError):
    """Exception raised when a mapping contract is invalid or cannot be applied."""
    pass


class ConfigurationError(ReportSplitterError):
    """Exception raised when configuration is invalid or missing."""
    pass


class DataTransformationError(ReportSplitterError):
    """Exception raised when a value cannot be coerced to its mapped type."""

    def __init__(self, message: str, field_name: str = None, source_value: str = None,
                 target_type: str = None):
        super().__init__(message)
        self.field_name = field_name
        self.source_value = source_value
        self.target_type = target_type


class StructuralAnomalyError(ReportSplitterError):
    """
    Raised by the tree walker when a node the contract expects to group
    children has none. The walker's anomaly policy decides whether only the
    branch is skipped or the remaining descent is abandoned.
    """

    def __init__(self, message: str, level_name: str = None, tag: str = None):
        super().__init__(message)
        self.level_name = level_name
        self.tag = tag
