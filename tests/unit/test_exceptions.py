"""
Tests for the report splitter exception hierarchy.
"""

import pytest

from report_splitter.exceptions import (
    ConfigurationError,
    DataTransformationError,
    MappingContractError,
    ReportSplitterError,
    StructuralAnomalyError,
    XMLParsingError,
)
from report_splitter.mapping.record_builder import coerce_value


class TestExceptionHierarchy:

    @pytest.mark.parametrize("error_class", [
        XMLParsingError, MappingContractError, ConfigurationError,
        DataTransformationError, StructuralAnomalyError,
    ])
    def test_all_errors_share_the_base(self, error_class):
        assert issubclass(error_class, ReportSplitterError)

    def test_base_error_takes_only_a_message(self):
        error = ReportSplitterError("bad report")
        assert str(error) == "bad report"
        assert error.args == ("bad report",)

    def test_parsing_error_truncates_content(self):
        error = XMLParsingError("broken", "<a>" + "x" * 600)
        assert len(error.xml_content) == 503
        assert error.xml_content.endswith("...")

    def test_parsing_error_keeps_short_content(self):
        assert XMLParsingError("broken", "<a>").xml_content == "<a>"
        assert XMLParsingError("broken").xml_content is None

    def test_anomaly_names_level_and_tag(self):
        error = StructuralAnomalyError("empty", level_name="package", tag="package")
        assert (error.level_name, error.tag) == ("package", "package")


class TestDirectCoercion:
    """Contracts are validated on load; only direct callers reach the type guard."""

    def test_unknown_type_carries_details(self):
        with pytest.raises(DataTransformationError) as excinfo:
            coerce_value("1", "decimal")
        assert excinfo.value.target_type == "decimal"
        assert excinfo.value.source_value == "1"
        assert excinfo.value.field_name is None
