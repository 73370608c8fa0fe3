"""
Report filters: one record in, zero or more derived records out.

A ReportFilter chains the source decoder, the XML parser and the tree walker
for one mapping contract. CoberturaFilter and JunitFilter bind the contracts
shipped with the package.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from ..config.config_manager import FilterConfig, get_config_manager
from ..decoding.source_decoder import SourceDecoder
from ..exceptions import XMLParsingError
from ..interfaces import ReportFilterInterface, XMLParserInterface
from ..mapping.record_builder import pass_through_fields, tag_record
from ..models import AnomalyPolicy, FilterResult, FilterStatus, MappingContract, OutputRecord
from ..parsing.xml_parser import XMLParser
from ..walking.tree_walker import TreeWalker, WalkState


class ReportFilter(ReportFilterInterface):
    """
    Decomposes the XML report embedded in a record.

    Outcomes:
    - Source field missing, multi-valued or empty: SKIPPED, nothing emitted
    - Malformed XML: PARSE_FAILURE, the original record is emitted with the
      contract's failure tag
    - Report root not found: NO_MATCH, nothing emitted
    - Otherwise: SPLIT, derived records in emission order, and the original
      record is superseded

    The filter holds no per-record state; concurrent calls on the same
    instance are independent.
    """

    def __init__(self, source: str, contract: MappingContract,
                 anomaly_policy: AnomalyPolicy = AnomalyPolicy.ABORT_REMAINING,
                 parser: Optional[XMLParserInterface] = None,
                 id_factory: Optional[Callable[[], str]] = None):
        """
        Args:
            source: Name of the record field holding the base64-encoded report
            contract: Mapping contract driving the decomposition
            anomaly_policy: How the walker handles empty grouping nodes
            parser: XML parser (lxml-backed XMLParser by default)
            id_factory: Linkage identifier generator (UUID4 by default)
        """
        self.config = FilterConfig(source=source)
        self.contract = contract
        self.decoder = SourceDecoder(self.config.source)
        self.parser = parser or XMLParser()
        self.walker = TreeWalker(contract, anomaly_policy, id_factory)
        self.logger = logging.getLogger(__name__)

    @property
    def source(self) -> str:
        return self.config.source

    def filter(self, record: Mapping[str, Any],
               emit: Optional[Callable[[OutputRecord], None]] = None) -> FilterResult:
        """
        Decompose the report embedded in one record.

        Args:
            record: Input record from the host pipeline (never modified)
            emit: Optional callback receiving every output record in emission order

        Returns:
            FilterResult describing the emitted records and the original's fate
        """
        self.logger.debug(f"Running {self.contract.name} filter")

        decoded = self.decoder.decode(record)
        if not decoded.is_decoded:
            self.logger.debug(f"Skipping record: {decoded.status.value}")
            return FilterResult(FilterStatus.SKIPPED)

        try:
            document = self.parser.parse(decoded.text)
        except XMLParsingError as e:
            self.logger.warning(f"Trouble parsing xml (source={self.source}): {e}")
            tagged = tag_record(record, self.contract.failure_tag)
            if emit is not None:
                emit(tagged)
            return FilterResult(FilterStatus.PARSE_FAILURE, [tagged])

        state = WalkState()
        records = []
        for derived in self.walker.walk(document, pass_through_fields(record, self.source), state):
            records.append(derived)
            if emit is not None:
                emit(derived)

        if not records:
            self.logger.debug(f"No <{self.contract.root.name}> element found in report")
            return FilterResult(FilterStatus.NO_MATCH)

        self.logger.debug(f"Record after {self.contract.name} filter: {state.records_built} derived record(s), "
                          f"{state.anomalies} anomaly(ies)")
        # Cancel the original record, the derived ones replace it.
        return FilterResult(FilterStatus.SPLIT, records, cancel_original=True)


def build_filter(contract_name: str, source: str,
                 anomaly_policy: AnomalyPolicy = AnomalyPolicy.ABORT_REMAINING,
                 **kwargs) -> ReportFilter:
    """
    Build a filter for a packaged contract name or a contract file path.

    Args:
        contract_name: 'cobertura', 'junit', or a path to a YAML/JSON contract
        source: Name of the record field holding the encoded report
        anomaly_policy: How the walker handles empty grouping nodes
    """
    contract = get_config_manager().load_mapping_contract(contract_name)
    return ReportFilter(source, contract, anomaly_policy, **kwargs)


class CoberturaFilter(ReportFilter):
    """Splits Cobertura coverage reports into coverage/package/class/method records."""

    def __init__(self, source: str, **kwargs):
        super().__init__(source, get_config_manager().load_mapping_contract('cobertura'), **kwargs)


class JunitFilter(ReportFilter):
    """Splits JUnit test reports into testsuite/testcase records."""

    def __init__(self, source: str, **kwargs):
        super().__init__(source, get_config_manager().load_mapping_contract('junit'), **kwargs)
