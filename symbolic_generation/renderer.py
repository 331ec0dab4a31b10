"""Text serialization of symbol trees.

Every rendered string follows::

    Leaf       := VariableName | IntegerLiteral
    InfixExpr  := Arg (sign Arg)*
    PrefixExpr := Name "(" Arg (", " Arg)* ")"
    Arg        := Leaf | InfixExpr | PrefixExpr

No parentheses are added around infix children, so the text describes the
tree shape only as far as the grammar does.
"""

from typing import Iterable, List

from .symbol_tree import Symbol, Variable, NumberLiteral, Operation, iter_postorder


def to_string(symbol: Symbol) -> str:
  """Render a tree bottom-up; pure and uncached"""
  if not isinstance(symbol, Symbol):
    raise TypeError(f"Cannot render {type(symbol).__name__}")

  # Rendered children wait on a stack until their parent consumes them,
  # so tree depth is not limited by the interpreter stack
  rendered: List[str] = []
  for node in iter_postorder(symbol):
    if isinstance(node, Variable):
      rendered.append(node.name)
    elif isinstance(node, NumberLiteral):
      rendered.append(str(node.value))
    elif isinstance(node, Operation):
      arity = len(node.children)
      arguments = rendered[-arity:]
      del rendered[-arity:]
      rendered.append(node.operation_type.render(arguments))
    else:
      if node.children:
        del rendered[-len(node.children):]
      rendered.append(node.to_string())
  return rendered[0]


def render_all(symbols: Iterable[Symbol]) -> List[str]:
  return [to_string(symbol) for symbol in symbols]


def render_corpus(symbols: Iterable[Symbol]) -> str:
  """One expression per line, each line newline-terminated"""
  return "".join(line + "\n" for line in render_all(symbols))
