"""Utilities for symbol trees."""

from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_type,
    count_nodes_by_type, count_operation_types, is_arity_consistent,
    corpus_statistics, get_variables, get_numbers, get_operations
)

__all__ = [
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_type',
    'count_nodes_by_type', 'count_operation_types', 'is_arity_consistent',
    'corpus_statistics', 'get_variables', 'get_numbers', 'get_operations'
]
