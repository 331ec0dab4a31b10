"""Symbol Tree Module

Expression tree data model: leaves, operations and operation types.
"""

from .core.node import (
    Symbol,
    Variable,
    NumberLiteral,
    Operation,
    iter_postorder
)
from .core.operators import (
    NodeType,
    OperationType,
    InfixOperationType,
    PrefixOperationType,
    INFIX_OPERATION_MAP,
    PREFIX_OPERATION_MAP,
    make_operation_type,
    ADDITION, MULTIPLICATION, SUBTRACTION, DIVISION, EXPONENTIATION,
    SIN, COS, LN, FLOOR
)
from .utils import (
    get_all_nodes, calculate_tree_depth, count_nodes_by_type,
    count_operation_types, is_arity_consistent, corpus_statistics
)

__all__ = [
    "Symbol", "Variable", "NumberLiteral", "Operation", "iter_postorder",
    "NodeType", "OperationType", "InfixOperationType", "PrefixOperationType",
    "INFIX_OPERATION_MAP", "PREFIX_OPERATION_MAP", "make_operation_type",
    "ADDITION", "MULTIPLICATION", "SUBTRACTION", "DIVISION", "EXPONENTIATION",
    "SIN", "COS", "LN", "FLOOR",
    "get_all_nodes", "calculate_tree_depth", "count_nodes_by_type",
    "count_operation_types", "is_arity_consistent", "corpus_statistics"
]
