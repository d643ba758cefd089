from __future__ import annotations

NodeId = int
END_ID: NodeId = 0      # Terminal sentinel, never a real node's key
START_ID: NodeId = 1    # Fixed traversal entry point


def check_id(node_id: NodeId) -> NodeId:
    """Return node_id unchanged if it is a non-negative int, else raise ValueError."""
    if isinstance(node_id, bool) or not isinstance(node_id, int) or node_id < 0:
        raise ValueError(f"Node ids must be non-negative integers, got {node_id!r}")
    return node_id
