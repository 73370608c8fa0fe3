"""
Path lookups over ParsedNode trees.

Lookups always return a NodeMatch, so callers never have to guess whether
they got nothing, one node, a list, or a stray string back.
"""

from enum import Enum
from typing import Iterator, Optional, Sequence, Tuple, Union

from ..models import ParsedNode


class MatchKind(Enum):
    NO_MATCH = "no_match"
    ONE_NODE = "one_node"
    MANY_NODES = "many_nodes"


class NodeMatch:
    """Tagged lookup result: NO_MATCH, ONE_NODE or MANY_NODES."""

    __slots__ = ('kind', 'nodes')

    def __init__(self, nodes: Tuple[ParsedNode, ...] = ()):
        self.nodes = tuple(nodes)
        if not self.nodes:
            self.kind = MatchKind.NO_MATCH
        elif len(self.nodes) == 1:
            self.kind = MatchKind.ONE_NODE
        else:
            self.kind = MatchKind.MANY_NODES

    @classmethod
    def of(cls, value: Union[None, str, ParsedNode, Sequence[ParsedNode]]) -> 'NodeMatch':
        """
        Normalize any lookup outcome into a NodeMatch.

        None, strings (an empty collection rendered as text) and empty
        sequences are NO_MATCH; a bare node becomes a one-element match.
        """
        if value is None or isinstance(value, str):
            return cls()
        if isinstance(value, ParsedNode):
            return cls((value,))
        return cls(tuple(node for node in value if isinstance(node, ParsedNode)))

    @property
    def first(self) -> Optional[ParsedNode]:
        return self.nodes[0] if self.nodes else None

    def __iter__(self) -> Iterator[ParsedNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __bool__(self) -> bool:
        return self.kind is not MatchKind.NO_MATCH

    def __repr__(self) -> str:
        return f"NodeMatch({self.kind.value}, {len(self.nodes)} node(s))"


def select_nodes(node: Optional[ParsedNode], path: str) -> NodeMatch:
    """
    Select descendants of a node by a '/'-separated path of element names.

    Args:
        node: Context node (the synthetic document node for absolute lookups)
        path: Element names relative to node, e.g. 'coverage/packages/package'

    Returns:
        NodeMatch with the matched nodes in document order
    """
    if node is None:
        return NodeMatch()

    current: Tuple[ParsedNode, ...] = (node,)
    for step in (part for part in path.strip('/').split('/') if part):
        current = tuple(
            child
            for parent in current
            for child in parent.children
            if step == '*' or child.tag == step
        )
        if not current:
            break
    return NodeMatch.of(current)


def first_child_group(node: Optional[ParsedNode]) -> Optional[ParsedNode]:
    """Return the first child element of a node, or None when it has none."""
    if node is None or not node.children:
        return None
    return node.children[0]
