"""
Contract-driven tree walker.

The walker executes a mapping contract's descent plan over a parsed report
and synthesizes one output record per matched node. Records are yielded in
post-order: every node's record follows the records of its whole subtree,
so the report root always comes last.
"""

import logging
import uuid
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from ..exceptions import StructuralAnomalyError
from ..mapping.enrichers import get_enricher
from ..mapping.record_builder import RecordBuilder
from ..models import AnomalyPolicy, LevelMapping, MappingContract, OutputRecord, ParsedNode
from ..parsing.node_lookup import NodeMatch, first_child_group, select_nodes


class WalkState:
    """Per-walk bookkeeping. Never shared between walks."""

    __slots__ = ('aborted', 'records_built', 'anomalies')

    def __init__(self):
        self.aborted = False
        self.records_built = 0
        self.anomalies = 0


class TreeWalker:
    """
    Walks a ParsedNode tree according to a MappingContract.

    For every node matched by a level:
    - the record fields are built before descending, including a fresh
      identifier when the level declares a guid_field
    - the identifier and the level's inherited fields are copied onto every
      descendant record
    - child levels are walked in declaration order, nodes in document order
    - the node's own record is yielded last

    A level with requires_children turns a childless node into a structural
    anomaly. With AnomalyPolicy.ABORT_REMAINING the rest of the descent is
    abandoned (records of enclosing nodes are still emitted); with
    AnomalyPolicy.SKIP_BRANCH only the offending node is dropped.
    """

    def __init__(self, contract: MappingContract,
                 anomaly_policy: AnomalyPolicy = AnomalyPolicy.ABORT_REMAINING,
                 id_factory: Optional[Callable[[], str]] = None):
        """
        Args:
            contract: Mapping contract describing the descent plan
            anomaly_policy: How structural anomalies are handled
            id_factory: Generator for linkage identifiers (random UUID4 strings by default)
        """
        self.contract = contract
        self.anomaly_policy = anomaly_policy
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self.logger = logging.getLogger(__name__)

    def walk(self, document: ParsedNode, base: Mapping[str, Any],
             state: Optional[WalkState] = None) -> Iterator[OutputRecord]:
        """
        Yield the records derived from a parsed document.

        Args:
            document: Synthetic document node returned by the parser
            base: Pass-through fields copied into every record
            state: Optional WalkState to inspect after the walk

        Yields:
            OutputRecord objects in emission order
        """
        state = state or WalkState()
        yield from self._walk_level(document, self.contract.root, base, {}, state)

    def match_level(self, parent: ParsedNode, level: LevelMapping) -> NodeMatch:
        """Nodes matched by a level under a parent; the first matching path wins."""
        context = first_child_group(parent) if level.within_first_child else parent
        for path in level.paths:
            match = select_nodes(context, path)
            if match:
                return match
        return NodeMatch()

    def _walk_level(self, parent: ParsedNode, level: LevelMapping, base: Mapping[str, Any],
                    linkage: Dict[str, Any], state: WalkState) -> Iterator[OutputRecord]:
        for node in self.match_level(parent, level):
            if state.aborted:
                return
            try:
                yield from self._walk_node(node, level, base, linkage, state)
            except StructuralAnomalyError as e:
                state.anomalies += 1
                if self.anomaly_policy is AnomalyPolicy.SKIP_BRANCH:
                    self.logger.warning(f"{e}; skipping this {level.name}")
                    continue
                self.logger.warning(f"{e}; abandoning remaining {self.contract.name} descent")
                state.aborted = True
                return

    def _walk_node(self, node: ParsedNode, level: LevelMapping, base: Mapping[str, Any],
                   linkage: Dict[str, Any], state: WalkState) -> Iterator[OutputRecord]:
        if level.requires_children and not node.children:
            raise StructuralAnomalyError(
                f"Empty <{node.tag}> node at level '{level.name}'",
                level_name=level.name, tag=node.tag,
            )

        self.logger.debug(f"Split {level.name} event")
        builder = RecordBuilder(base, level.record_type, node)
        builder.update(linkage)
        builder.apply_mappings(node, level.fields)
        if level.guid_field:
            builder.set(level.guid_field, self.id_factory())
        for enricher in level.enrichers:
            get_enricher(enricher.name)(builder, node, enricher.options)

        if level.children:
            child_linkage = dict(linkage)
            if level.guid_field:
                child_linkage[level.guid_field] = builder.get(level.guid_field)
            for field_name in level.inherit:
                child_linkage[field_name] = builder.get(field_name)

            for child_level in level.children:
                if state.aborted:
                    break
                yield from self._walk_level(node, child_level, base, child_linkage, state)

        state.records_built += 1
        yield builder.build()
