from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence, Tuple

from .operators import NodeType, OperationType, has_line_break
from ...errors import ArityMismatchError


def iter_postorder(root: 'Symbol') -> Iterator['Symbol']:
  """Children before parents, left to right, using an explicit stack"""
  stack = [(root, False)]
  while stack:
    node, expanded = stack.pop()
    children = node.children
    if expanded or not children:
      yield node
    else:
      stack.append((node, True))
      stack.extend((child, False) for child in reversed(children))


class Symbol(ABC):
  """Base node class with size, depth and hash caching"""

  __slots__ = ('_hash_cache', '_size_cache', '_depth_cache')

  node_type: NodeType

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None
    self._depth_cache: Optional[int] = None

  @abstractmethod
  def to_string(self) -> str:
    pass

  @property
  def children(self) -> Tuple['Symbol', ...]:
    return ()

  def is_leaf(self) -> bool:
    return not self.children

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      for node in iter_postorder(self):
        if node._size_cache is None:
          node._size_cache = 1 + sum(child._size_cache for child in node.children)
    return self._size_cache

  def depth(self) -> int:
    """Longest root-to-leaf path in edges (a leaf has depth 0)"""
    if self._depth_cache is None:
      for node in iter_postorder(self):
        if node._depth_cache is None:
          children = node.children
          node._depth_cache = 1 + max(child._depth_cache for child in children) if children else 0
    return self._depth_cache

  def __hash__(self) -> int:
    if self._hash_cache is None:
      # Fill child caches first so _compute_hash never recurses
      for node in iter_postorder(self):
        if node._hash_cache is None:
          node._hash_cache = node._compute_hash()
    return self._hash_cache

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  def __str__(self) -> str:
    return self.to_string()


class Variable(Symbol):
  __slots__ = ('_name',)

  node_type = NodeType.VARIABLE

  def __init__(self, name: str):
    super().__init__()
    if not isinstance(name, str) or not name:
      raise ValueError(f"Variable name must be a non-empty string, got {name!r}")
    if has_line_break(name):
      raise ValueError(f"Variable name must not contain line breaks, got {name!r}")
    self._name = name

  @property
  def name(self) -> str:
    return self._name

  def to_string(self) -> str:
    return self._name

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self._name))

  def __eq__(self, other) -> bool:
    if not isinstance(other, Variable):
      return NotImplemented
    return self._name == other._name

  __hash__ = Symbol.__hash__

  def __reduce__(self):
    return (Variable, (self._name,))

  def __repr__(self) -> str:
    return f"Variable({self._name!r})"


class NumberLiteral(Symbol):
  __slots__ = ('_value',)

  node_type = NodeType.NUMBER

  def __init__(self, value: int):
    super().__init__()
    if isinstance(value, bool) or not isinstance(value, int):
      raise TypeError(f"NumberLiteral value must be an int, got {type(value).__name__}")
    self._value = value

  @property
  def value(self) -> int:
    return self._value

  def to_string(self) -> str:
    return str(self._value)

  def _compute_hash(self) -> int:
    return hash((NodeType.NUMBER, self._value))

  def __eq__(self, other) -> bool:
    if not isinstance(other, NumberLiteral):
      return NotImplemented
    return self._value == other._value

  __hash__ = Symbol.__hash__

  def __reduce__(self):
    return (NumberLiteral, (self._value,))

  def __repr__(self) -> str:
    return f"NumberLiteral({self._value})"


class Operation(Symbol):
  __slots__ = ('_operation_type', '_children')

  node_type = NodeType.OPERATION

  def __init__(self, operation_type: OperationType, children: Sequence[Symbol]):
    super().__init__()
    if not isinstance(operation_type, OperationType):
      raise TypeError(f"Expected an OperationType, got {type(operation_type).__name__}")
    children = tuple(children)
    if len(children) != operation_type.get_arity():
      raise ArityMismatchError(
        f"{operation_type!r} expects {operation_type.get_arity()} children, got {len(children)}"
      )
    for child in children:
      if not isinstance(child, Symbol):
        raise TypeError(f"Operation children must be Symbols, got {type(child).__name__}")
    self._operation_type = operation_type
    self._children = children

  @property
  def operation_type(self) -> OperationType:
    return self._operation_type

  @property
  def children(self) -> Tuple[Symbol, ...]:
    return self._children

  def to_string(self) -> str:
    # Children first, then each node's composition rule
    rendered: List[str] = []
    for node in iter_postorder(self):
      if node.children:
        arguments = rendered[-len(node.children):]
        del rendered[-len(node.children):]
        if isinstance(node, Operation):
          rendered.append(node._operation_type.render(arguments))
          continue
      rendered.append(node.to_string())
    return rendered[0]

  def _compute_hash(self) -> int:
    return hash((NodeType.OPERATION, self._operation_type, tuple(hash(c) for c in self._children)))

  def __eq__(self, other) -> bool:
    if not isinstance(other, Operation):
      return NotImplemented
    pending = [(self, other)]
    while pending:
      left, right = pending.pop()
      if left is right:
        continue
      if isinstance(left, Operation) and isinstance(right, Operation):
        if (left._operation_type != right._operation_type
            or len(left._children) != len(right._children)):
          return False
        pending.extend(zip(left._children, right._children))
      elif not left == right:
        return False
    return True

  __hash__ = Symbol.__hash__

  def __reduce__(self):
    # Flat post-order tokens: deep trees pickle without recursion and
    # hash caches are never carried across processes
    tokens = [node._operation_type if isinstance(node, Operation) else node
              for node in iter_postorder(self)]
    return (_rebuild_operation, (tokens,))

  def __repr__(self) -> str:
    return f"Operation({self._operation_type!r}, {self.to_string()!r})"


def _rebuild_operation(tokens: list) -> Operation:
  stack: List[Symbol] = []
  for token in tokens:
    if isinstance(token, OperationType):
      arity = token.get_arity()
      children = stack[-arity:]
      del stack[-arity:]
      stack.append(Operation(token, children))
    else:
      stack.append(token)
  return stack[0]
