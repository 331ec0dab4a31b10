"""
Tree Utility Functions

Traversal and analysis helpers for generated symbol trees. The generator and
the renderer never depend on these; they back corpus statistics and checks.
"""

import numpy as np
from collections import Counter, deque
from typing import Dict, Iterable, List, Type, TypeVar, cast

from ..core.node import Symbol, Variable, NumberLiteral, Operation
from ..core.operators import NodeType

T = TypeVar('T', bound=Symbol)


def get_all_nodes(node: Symbol, traversal_order: str = 'breadth_first') -> List[Symbol]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Symbol) -> List[Symbol]:
    nodes_to_visit = deque([node])
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.popleft()
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children)

    return all_nodes


def _depth_first_traversal(node: Symbol) -> List[Symbol]:
    # Pre-order, children left to right
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop()
        all_nodes.append(current_node)
        nodes_to_visit.extend(reversed(current_node.children))

    return all_nodes


def calculate_tree_depth(node: Symbol) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Longest root-to-leaf path counted in edges (leaf nodes have depth 0)
    """
    # Level by level, so arbitrarily deep chains are fine
    depth = 0
    level = list(node.children)
    while level:
        depth += 1
        level = [child for n in level for child in n.children]
    return depth


def find_nodes_by_type(node: Symbol, node_type: Type[T]) -> List[T]:
    """
    Find all nodes of a specific class in the tree.

    Args:
        node: Root node of the tree
        node_type: Class of nodes to find (e.g., Variable, Operation)

    Returns:
        List of nodes matching the specified class
    """
    return [n for n in get_all_nodes(node) if isinstance(n, node_type)]


def count_nodes_by_type(node: Symbol) -> Dict[NodeType, int]:
    """Count variables, numbers and operations in the tree."""
    counts = {node_type: 0 for node_type in NodeType}
    for n in get_all_nodes(node):
        counts[n.node_type] += 1
    return counts


def count_operation_types(node: Symbol) -> Counter:
    """Count operation nodes by operation symbol."""
    return Counter(n.operation_type.symbol for n in find_nodes_by_type(node, Operation))


def is_arity_consistent(node: Symbol) -> bool:
    """
    Check that every operation has exactly as many children as its arity.

    Args:
        node: Root node of the tree

    Returns:
        True if every operation node matches its declared arity
    """
    for n in get_all_nodes(node):
        if isinstance(n, Operation):
            if len(n.children) != n.operation_type.get_arity():
                return False
        elif not isinstance(n, (Variable, NumberLiteral)):
            # Unknown node type
            return False
    return True


def corpus_statistics(symbols: Iterable[Symbol]) -> Dict[str, object]:
    """
    Summarize a batch of generated trees.

    Args:
        symbols: Generated trees

    Returns:
        Dictionary with count, size and depth aggregates plus operation counts
    """
    symbols = list(symbols)
    if not symbols:
        return {'count': 0, 'mean_size': 0.0, 'max_size': 0,
                'mean_depth': 0.0, 'max_depth': 0, 'operation_counts': Counter()}

    sizes = np.array([s.size() for s in symbols], dtype=np.int64)
    depths = np.array([s.depth() for s in symbols], dtype=np.int64)

    operation_counts = Counter()
    for s in symbols:
        operation_counts.update(count_operation_types(s))

    return {
        'count': len(symbols),
        'mean_size': float(sizes.mean()),
        'max_size': int(sizes.max()),
        'mean_depth': float(depths.mean()),
        'max_depth': int(depths.max()),
        'operation_counts': operation_counts,
    }


# Convenience functions for common operations
def get_variables(node: Symbol) -> List[Variable]:
    """Get all variable nodes in the tree."""
    return cast(List[Variable], find_nodes_by_type(node, Variable))


def get_numbers(node: Symbol) -> List[NumberLiteral]:
    """Get all number literal nodes in the tree."""
    return cast(List[NumberLiteral], find_nodes_by_type(node, NumberLiteral))


def get_operations(node: Symbol) -> List[Operation]:
    """Get all operation nodes in the tree."""
    return cast(List[Operation], find_nodes_by_type(node, Operation))
