import numpy as np
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

from .errors import CatalogueError, InvalidDepthError
from .logging_system import log_debug
from .sampling import CategoricalDistribution, WeightedSampler
from .symbol_tree import (
  Symbol, Variable, NumberLiteral, Operation, NodeType, OperationType,
  ADDITION, MULTIPLICATION, SUBTRACTION, DIVISION, EXPONENTIATION,
  SIN, COS, LN, FLOOR
)

CategoryKey = Union[str, NodeType]

ZERO_DEPTH_CATEGORIES = (NodeType.VARIABLE, NodeType.NUMBER)
ANY_DEPTH_CATEGORIES = (NodeType.VARIABLE, NodeType.NUMBER, NodeType.OPERATION)


def _check_entries(entries, item_type: Type, label: str) -> Tuple[tuple, tuple]:
  """Split (item, weight) pairs into parallel item and weight tuples"""
  items, weights = [], []
  for entry in entries:
    try:
      item, weight = entry
    except (TypeError, ValueError):
      raise CatalogueError(f"{label} entries must be (item, weight) pairs, got {entry!r}") from None
    if not isinstance(item, item_type):
      raise CatalogueError(f"Expected a {item_type.__name__} in the {label} catalogue, got {item!r}")
    if isinstance(weight, bool):
      raise CatalogueError(f"Weight for {item!r} must be a number, got {weight!r}")
    try:
      weights.append(float(weight))
    except (TypeError, ValueError):
      raise CatalogueError(f"Weight for {item!r} must be a number, got {weight!r}") from None
    items.append(item)
  return tuple(items), tuple(weights)


def _check_category_weights(category_weights: Mapping[CategoryKey, float]) -> Dict[NodeType, float]:
  # Missing categories weigh zero
  weights = {node_type: 0.0 for node_type in NodeType}
  for key, weight in category_weights.items():
    node_type = NodeType.from_category(key)
    if isinstance(weight, bool):
      raise CatalogueError(f"Category weight for {key!r} must be a number, got {weight!r}")
    try:
      weights[node_type] = float(weight)
    except (TypeError, ValueError):
      raise CatalogueError(f"Category weight for {key!r} must be a number, got {weight!r}") from None
  return weights


class Catalogue:
  """Weighted variables, operation types and numbers plus per-category weights"""

  def __init__(self,
               variables: Sequence[Tuple[Variable, float]],
               operation_types: Sequence[Tuple[OperationType, float]],
               numbers: Sequence[Tuple[NumberLiteral, float]],
               category_weights: Mapping[CategoryKey, float]):
    self.variables, self.variable_weights = _check_entries(variables, Variable, 'variable')
    self.operation_types, self.operation_type_weights = _check_entries(
      operation_types, OperationType, 'operation type')
    self.numbers, self.number_weights = _check_entries(numbers, NumberLiteral, 'number')
    self._category_weights = _check_category_weights(category_weights)

  @property
  def category_weights(self) -> Dict[str, float]:
    return {node_type.category: weight for node_type, weight in self._category_weights.items()}

  def category_weight(self, key: CategoryKey) -> float:
    return self._category_weights[NodeType.from_category(key)]

  def variables_and_weights(self) -> List[Tuple[Variable, float]]:
    return list(zip(self.variables, self.variable_weights))

  def operation_types_and_weights(self) -> List[Tuple[OperationType, float]]:
    return list(zip(self.operation_types, self.operation_type_weights))

  def numbers_and_weights(self) -> List[Tuple[NumberLiteral, float]]:
    return list(zip(self.numbers, self.number_weights))

  @classmethod
  def default(cls) -> 'Catalogue':
    """Arithmetic and elementary functions over x and 3, operation-heavy"""
    return cls(
      variables=[(Variable('x'), 1.0)],
      operation_types=[
        (ADDITION, 1.0), (MULTIPLICATION, 1.0), (SUBTRACTION, 1.0),
        (DIVISION, 1.0), (EXPONENTIATION, 1.0),
        (SIN, 1.0), (COS, 1.0), (LN, 1.0), (FLOOR, 1.0),
      ],
      numbers=[(NumberLiteral(3), 1.0)],
      category_weights={'variable': 1.0, 'operation': 3.0, 'number': 1.0},
    )

  def __repr__(self) -> str:
    return (f"Catalogue(variables={len(self.variables)}, operation_types={len(self.operation_types)}, "
            f"numbers={len(self.numbers)}, category_weights={self.category_weights})")


class OperationGenerator:
  """Depth-bounded weighted random generator of symbol trees"""

  def __init__(self, catalogue: Catalogue, sampler: Optional[WeightedSampler] = None):
    if not isinstance(catalogue, Catalogue):
      raise TypeError(f"Expected a Catalogue, got {type(catalogue).__name__}")
    self.catalogue = catalogue
    self.sampler = sampler if sampler is not None else WeightedSampler()
    self._distributions: Dict[str, CategoricalDistribution] = {}

  @classmethod
  def from_catalogue(cls, catalogue: Catalogue, seed: Optional[int] = None,
                     rng: Optional[np.random.Generator] = None) -> 'OperationGenerator':
    return cls(catalogue, WeightedSampler(seed=seed, rng=rng))

  @classmethod
  def from_weights(cls,
                   variables_and_weights: Sequence[Tuple[Variable, float]],
                   operation_types_and_weights: Sequence[Tuple[OperationType, float]],
                   numbers_and_weights: Sequence[Tuple[NumberLiteral, float]],
                   category_weights: Mapping[CategoryKey, float],
                   seed: Optional[int] = None,
                   rng: Optional[np.random.Generator] = None) -> 'OperationGenerator':
    catalogue = Catalogue(variables_and_weights, operation_types_and_weights,
                          numbers_and_weights, category_weights)
    return cls.from_catalogue(catalogue, seed=seed, rng=rng)

  def _distribution(self, key: str) -> CategoricalDistribution:
    # Built on first use so an unused empty catalogue is not an error
    distribution = self._distributions.get(key)
    if distribution is None:
      distribution = self._build_distribution(key)
      self._distributions[key] = distribution
    return distribution

  def _build_distribution(self, key: str) -> CategoricalDistribution:
    catalogue = self.catalogue
    if key == 'zero_depth':
      return CategoricalDistribution(
        ZERO_DEPTH_CATEGORIES, [catalogue.category_weight(c) for c in ZERO_DEPTH_CATEGORIES])
    elif key == 'any_depth':
      return CategoricalDistribution(
        ANY_DEPTH_CATEGORIES, [catalogue.category_weight(c) for c in ANY_DEPTH_CATEGORIES])
    elif key == 'variable':
      return CategoricalDistribution(catalogue.variables, catalogue.variable_weights)
    elif key == 'number':
      return CategoricalDistribution(catalogue.numbers, catalogue.number_weights)
    elif key == 'operation':
      return CategoricalDistribution(catalogue.operation_types, catalogue.operation_type_weights)
    raise KeyError(key)

  def generate_operation_type(self) -> OperationType:
    return self.sampler.sample(self._distribution('operation'))

  def generate_variable(self) -> Variable:
    return self.sampler.sample(self._distribution('variable'))

  def generate_number(self) -> NumberLiteral:
    return self.sampler.sample(self._distribution('number'))

  def generate_symbol(self, depth: int) -> Symbol:
    """Generate one tree whose root kind is drawn from the depth-dependent category weights"""
    check_depth(depth)
    return self._build(depth, root_is_operation=False)

  def generate_symbols(self, depth: int, amount: int) -> List[Symbol]:
    check_depth(depth)
    check_amount(amount)
    return [self._build(depth, root_is_operation=False) for _ in range(amount)]

  def generate_operation(self, depth: int) -> Operation:
    """Generate one tree whose root is always an operation"""
    check_depth(depth)
    return self._build(depth, root_is_operation=True)

  def generate_operations(self, depth: int, amount: int) -> List[Operation]:
    check_depth(depth)
    check_amount(amount)
    operations = [self._build(depth, root_is_operation=True) for _ in range(amount)]
    log_debug(f"Generated {amount} operations at depth {depth}")
    return operations

  def _draw_node_type(self, depth: int) -> NodeType:
    if depth == 0:
      # Operations are not in the zero-depth support, so the tree stops growing here
      return self.sampler.sample(self._distribution('zero_depth'))
    return self.sampler.sample(self._distribution('any_depth'))

  def _build(self, depth: int, root_is_operation: bool) -> Symbol:
    """
    Pre-order generation with an explicit stack of open operations.

    Draws happen in the same order as the recursive definition: node kind,
    then operation type, then children left to right.
    """
    # Each entry: (operation_type, child_depth, children built so far)
    pending: List[Tuple[OperationType, int, List[Symbol]]] = []
    force_operation = root_is_operation
    while True:
      if force_operation:
        node_type = NodeType.OPERATION
        force_operation = False
      else:
        node_type = self._draw_node_type(depth)

      if node_type == NodeType.OPERATION:
        depth = max(depth - 1, 0)
        pending.append((self.generate_operation_type(), depth, []))
        continue

      node = self.generate_variable() if node_type == NodeType.VARIABLE else self.generate_number()
      while pending:
        operation_type, depth, children = pending[-1]
        children.append(node)
        if len(children) < operation_type.get_arity():
          break
        pending.pop()
        node = Operation(operation_type, children)
      else:
        return node


def check_depth(depth: int):
  if isinstance(depth, bool) or not isinstance(depth, (int, np.integer)):
    raise TypeError(f"Depth must be an integer, got {type(depth).__name__}")
  if depth < 0:
    raise InvalidDepthError(f"Depth must be non-negative, got {depth}")


def check_amount(amount: int):
  if isinstance(amount, bool) or not isinstance(amount, (int, np.integer)):
    raise TypeError(f"Amount must be an integer, got {type(amount).__name__}")
  if amount < 0:
    raise ValueError(f"Amount must be non-negative, got {amount}")
