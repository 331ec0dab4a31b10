from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Dict, Sequence

from ...errors import ArityMismatchError, CatalogueError


def has_line_break(text: str) -> bool:
  """True when text would split into more than one line of a corpus file"""
  return text.splitlines() != [text]


class NodeType(IntEnum):
  VARIABLE = 0
  NUMBER = 1
  OPERATION = 2

  @property
  def category(self) -> str:
    return self.name.lower()

  @classmethod
  def from_category(cls, key) -> 'NodeType':
    if isinstance(key, NodeType):
      return key
    try:
      return cls[str(key).upper()]
    except KeyError:
      raise CatalogueError(f"Unknown category: {key!r}") from None


class OperationType(ABC):
  """Arity plus rendering rule shared by every operation of one kind"""

  __slots__ = ('_symbol', '_arity')

  def __init__(self, symbol: str, arity: int):
    if not isinstance(symbol, str) or not symbol:
      raise CatalogueError(f"Operation symbol must be a non-empty string, got {symbol!r}")
    if has_line_break(symbol):
      raise CatalogueError(f"Operation symbol must not contain line breaks, got {symbol!r}")
    if isinstance(arity, bool) or not isinstance(arity, int) or arity < 1:
      raise CatalogueError(f"Arity must be a positive integer, got {arity!r}")
    self._symbol = symbol
    self._arity = arity

  @property
  def symbol(self) -> str:
    return self._symbol

  @property
  def arity(self) -> int:
    return self._arity

  def get_arity(self) -> int:
    return self._arity

  def render(self, child_strings: Sequence[str]) -> str:
    if len(child_strings) != self._arity:
      raise ArityMismatchError(
        f"{self!r} expects {self._arity} arguments, got {len(child_strings)}"
      )
    return self._compose(list(child_strings))

  @abstractmethod
  def _compose(self, child_strings: Sequence[str]) -> str:
    pass

  def __eq__(self, other) -> bool:
    if type(other) is not type(self):
      return NotImplemented
    return self._symbol == other._symbol and self._arity == other._arity

  def __hash__(self) -> int:
    return hash((type(self).__name__, self._symbol, self._arity))

  def __reduce__(self):
    return (type(self), (self._symbol, self._arity))

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self._symbol!r}, {self._arity})"


class InfixOperationType(OperationType):
  """Children separated by the sign: a+b+c"""

  __slots__ = ()

  def __init__(self, sign: str, arity: int = 2):
    super().__init__(sign, arity)

  @property
  def sign(self) -> str:
    return self._symbol

  def _compose(self, child_strings):
    return self._symbol.join(child_strings)


class PrefixOperationType(OperationType):
  """Function-call style: name(a, b)"""

  __slots__ = ()

  SEPARATOR = ", "

  def __init__(self, name: str, arity: int = 1):
    super().__init__(name, arity)

  @property
  def name(self) -> str:
    return self._symbol

  def _compose(self, child_strings):
    return f"{self._symbol}({self.SEPARATOR.join(child_strings)})"


# Built-in operation types
ADDITION = InfixOperationType('+', 2)
MULTIPLICATION = InfixOperationType('*', 2)
SUBTRACTION = InfixOperationType('-', 2)
DIVISION = InfixOperationType('/', 2)
EXPONENTIATION = InfixOperationType('^', 2)

SIN = PrefixOperationType('sin', 1)
COS = PrefixOperationType('cos', 1)
LN = PrefixOperationType('ln', 1)
FLOOR = PrefixOperationType('floor', 1)

# Mapping dictionaries
INFIX_OPERATION_MAP: Dict[str, InfixOperationType] = {
  op.sign: op for op in (ADDITION, MULTIPLICATION, SUBTRACTION, DIVISION, EXPONENTIATION)
}
PREFIX_OPERATION_MAP: Dict[str, PrefixOperationType] = {
  op.name: op for op in (SIN, COS, LN, FLOOR)
}

OPERATION_KINDS = {
  'infix': InfixOperationType,
  'prefix': PrefixOperationType,
}


def make_operation_type(kind: str, symbol: str, arity: int) -> OperationType:
  """Return the built-in instance when one matches, otherwise a new operation type"""
  if kind not in OPERATION_KINDS:
    raise CatalogueError(f"Unknown operation kind: {kind!r} (expected one of {sorted(OPERATION_KINDS)})")
  known = INFIX_OPERATION_MAP if kind == 'infix' else PREFIX_OPERATION_MAP
  existing = known.get(symbol)
  if existing is not None and existing.arity == arity:
    return existing
  return OPERATION_KINDS[kind](symbol, arity)
