"""XML parsing and node lookup."""

from .node_lookup import MatchKind, NodeMatch, first_child_group, select_nodes
from .xml_parser import DOCUMENT_TAG, XMLParser

__all__ = ['DOCUMENT_TAG', 'MatchKind', 'NodeMatch', 'XMLParser', 'first_child_group', 'select_nodes']
