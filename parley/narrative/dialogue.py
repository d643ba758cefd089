from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, List, Optional

from parley.console import Console
from parley.narrative.ids import END_ID, START_ID, NodeId, check_id
from parley.narrative.types import Node

logger = logging.getLogger(__name__)


class ConnectResult(Enum):
    CONNECTED = "connected"
    SOURCE_MISSING = "source_missing"            # No edge created
    DESTINATION_MISSING = "destination_missing"  # Edge created, but it dangles

    @property
    def ok(self) -> bool:
        return self is not ConnectResult.SOURCE_MISSING


class Dialogue:
    """
    Owns every node keyed by id and drives traversal.

    Build phase: insert_node / connect_nodes / ChoiceNode.insert_option.
    Play phase: run(). Changing the graph while run() is active is not supported.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console if console is not None else Console()
        self._nodes: Dict[NodeId, Node] = {}

    # --- construction -------------------------------------------------------
    def insert_node(self, node_id: NodeId, node: Node) -> None:
        """Store node under node_id, replacing whatever was there."""
        node_id = check_id(node_id)
        if node_id in self._nodes:
            logger.debug("Replacing node %d", node_id)
        self._nodes[node_id] = node

    def connect_nodes(self, from_id: NodeId, to_id: NodeId) -> ConnectResult:
        node = self._nodes.get(from_id)
        if node is None:
            logger.warning("connect_nodes(%r, %r): no node %r, edge not created", from_id, to_id, from_id)
            return ConnectResult.SOURCE_MISSING

        node.connect(check_id(to_id))
        if to_id != END_ID and to_id not in self._nodes:
            # Valid, traversal will stop there unless the node is added later
            logger.debug("connect_nodes(%d, %d): destination not stored yet", from_id, to_id)
            return ConnectResult.DESTINATION_MISSING
        return ConnectResult.CONNECTED

    # --- introspection ------------------------------------------------------
    def get(self, node_id: NodeId) -> Optional[Node]:
        return self._nodes.get(node_id)

    def ids(self) -> List[NodeId]:
        return list(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    # --- traversal ----------------------------------------------------------
    def run(self) -> int:
        """
        Visit nodes from START_ID until END_ID or an id with no stored node.
        Returns the number of visits. Cycles run forever.
        """
        visits = 0
        current = START_ID
        while current != END_ID:
            node = self._nodes.get(current)
            if node is None:
                logger.debug("Stopping: no node stored under %d", current)
                break
            logger.debug("Visiting node %d (%s)", current, type(node).__name__)
            current = node.emit(self.console)
            visits += 1
        else:
            logger.debug("Stopping: reached end sentinel")
        return visits

    talk = run
