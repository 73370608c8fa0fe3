"""
Schema-specific enrichers.

Field mappings cover plain attribute copies. Anything that depends on the
shape of a node (numbered sibling fields, result classification) is an
enricher: a function taking the record builder, the matched node and the
enricher options from the contract. Contracts refer to enrichers by name.
"""

from typing import Any, Callable, Dict

from ..exceptions import MappingContractError
from ..models import ParsedNode
from ..parsing.node_lookup import select_nodes
from .record_builder import RecordBuilder


Enricher = Callable[[RecordBuilder, ParsedNode, Dict[str, Any]], None]


def indexed_text(builder: RecordBuilder, node: ParsedNode, options: Dict[str, Any]) -> None:
    """
    Number the text of repeated elements: <prefix>1, <prefix>2, ...

    Options:
        path: Elements to number, relative to the node (e.g. 'sources/source')
        prefix: Output field prefix (e.g. 'coverage_source')
    """
    for index, element in enumerate(select_nodes(node, options['path']), 1):
        builder.set(f"{options['prefix']}{index}", element.text)


def testcase_result(builder: RecordBuilder, node: ParsedNode, options: Dict[str, Any]) -> None:
    """
    Classify a test case by its child elements.

    No children means success. A single child (failure, error, skipped, ...)
    gives its name, type, message and text. Several children give 'various'
    plus one numbered group of fields per child.

    Options:
        prefix: Output field prefix (default 'testcase_result')
    """
    prefix = options.get('prefix', 'testcase_result')
    outcomes = node.children

    if not outcomes:
        builder.set(prefix, 'success')
    elif len(outcomes) == 1:
        outcome = outcomes[0]
        builder.set(prefix, outcome.tag)
        builder.set(f"{prefix}_type", outcome.get('type'))
        builder.set(f"{prefix}_message", outcome.get('message'))
        builder.set(f"{prefix}_content", outcome.text)
    else:
        builder.set(prefix, 'various')
        for index, outcome in enumerate(outcomes, 1):
            builder.set(f"{prefix}{index}", outcome.tag)
            builder.set(f"{prefix}{index}_type", outcome.get('type'))
            builder.set(f"{prefix}{index}_message", outcome.get('message'))
            builder.set(f"{prefix}{index}_content", outcome.text)


ENRICHERS: Dict[str, Enricher] = {
    'indexed_text': indexed_text,
    'testcase_result': testcase_result,
}

REQUIRED_OPTIONS: Dict[str, tuple] = {
    'indexed_text': ('path', 'prefix'),
    'testcase_result': (),
}


def get_enricher(name: str) -> Enricher:
    """Look up an enricher by contract name."""
    try:
        return ENRICHERS[name]
    except KeyError:
        raise MappingContractError(f"Unknown enricher: {name}") from None
