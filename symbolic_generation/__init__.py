"""Symbolic Generation Package

Weighted, depth-bounded random generation of symbolic expression trees and
their text serialization, for building parser and evaluator test corpora.
"""

from .symbol_tree import (
  Symbol, Variable, NumberLiteral, Operation,
  NodeType, OperationType, InfixOperationType, PrefixOperationType,
  ADDITION, MULTIPLICATION, SUBTRACTION, DIVISION, EXPONENTIATION,
  SIN, COS, LN, FLOOR
)
from .errors import (
  GenerationError, InvalidDistributionError, InvalidDepthError,
  ArityMismatchError, CatalogueError
)
from .sampling import CategoricalDistribution, WeightedSampler, weighted_choice, weighted_choices
from .generator import Catalogue, OperationGenerator
from .renderer import to_string, render_all, render_corpus
from .batch import BatchGenerator
from .corpus import generate_output_file_name, write_corpus
from .config import GeneratorConfig, catalogue_from_dict

__version__ = "0.1.0"
__all__ = [
  "Symbol", "Variable", "NumberLiteral", "Operation",
  "NodeType", "OperationType", "InfixOperationType", "PrefixOperationType",
  "ADDITION", "MULTIPLICATION", "SUBTRACTION", "DIVISION", "EXPONENTIATION",
  "SIN", "COS", "LN", "FLOOR",
  "GenerationError", "InvalidDistributionError", "InvalidDepthError",
  "ArityMismatchError", "CatalogueError",
  "CategoricalDistribution", "WeightedSampler", "weighted_choice", "weighted_choices",
  "Catalogue", "OperationGenerator",
  "to_string", "render_all", "render_corpus",
  "BatchGenerator",
  "generate_output_file_name", "write_corpus",
  "GeneratorConfig", "catalogue_from_dict"
]
