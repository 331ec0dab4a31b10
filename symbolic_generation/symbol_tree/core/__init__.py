"""Core symbol tree components."""

from .node import Symbol, Variable, NumberLiteral, Operation, iter_postorder
from .operators import (
    NodeType, OperationType, InfixOperationType, PrefixOperationType,
    INFIX_OPERATION_MAP, PREFIX_OPERATION_MAP, OPERATION_KINDS, make_operation_type,
    ADDITION, MULTIPLICATION, SUBTRACTION, DIVISION, EXPONENTIATION,
    SIN, COS, LN, FLOOR
)

__all__ = [
    'Symbol', 'Variable', 'NumberLiteral', 'Operation', 'iter_postorder',
    'NodeType', 'OperationType', 'InfixOperationType', 'PrefixOperationType',
    'INFIX_OPERATION_MAP', 'PREFIX_OPERATION_MAP', 'OPERATION_KINDS', 'make_operation_type',
    'ADDITION', 'MULTIPLICATION', 'SUBTRACTION', 'DIVISION', 'EXPONENTIATION',
    'SIN', 'COS', 'LN', 'FLOOR'
]
