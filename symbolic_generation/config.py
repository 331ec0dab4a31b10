"""
Generation configuration.

A run is described by a GeneratorConfig; the catalogue part can come from a
JSON document of the form::

    {
      "variables": [["x", 1.0]],
      "numbers": [[3, 1.0]],
      "operations": [{"kind": "infix", "symbol": "+", "arity": 2, "weight": 1.0}],
      "category_weights": {"variable": 1, "number": 1, "operation": 3}
    }

Sections left out fall back to the default catalogue.
"""
import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple

from .errors import CatalogueError
from .generator import Catalogue
from .symbol_tree import Variable, NumberLiteral, OperationType, make_operation_type

CATALOGUE_KEYS = ('variables', 'numbers', 'operations', 'category_weights')


def _pairs(section: Any, label: str) -> List[Tuple[Any, Any]]:
    if not isinstance(section, list):
        raise CatalogueError(f"'{label}' must be a list of [value, weight] pairs")
    pairs = []
    for entry in section:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise CatalogueError(f"'{label}' entries must be [value, weight] pairs, got {entry!r}")
        pairs.append((entry[0], entry[1]))
    return pairs


def _parse_operation(entry: Any) -> Tuple[OperationType, Any]:
    if not isinstance(entry, dict):
        raise CatalogueError(f"Operation entries must be objects, got {entry!r}")
    missing = [key for key in ('kind', 'symbol', 'arity') if key not in entry]
    if missing:
        raise CatalogueError(f"Operation entry {entry!r} is missing {', '.join(missing)}")
    operation_type = make_operation_type(entry['kind'], entry['symbol'], entry['arity'])
    return operation_type, entry.get('weight', 1.0)


def catalogue_from_dict(data: Dict[str, Any]) -> Catalogue:
    """Build a Catalogue, taking missing sections from Catalogue.default()"""
    unknown = set(data) - set(CATALOGUE_KEYS)
    if unknown:
        raise CatalogueError(f"Unknown catalogue sections: {sorted(unknown)}")

    default = Catalogue.default()

    if 'variables' in data:
        variables = []
        for name, weight in _pairs(data['variables'], 'variables'):
            try:
                variables.append((Variable(name), weight))
            except ValueError as e:
                raise CatalogueError(str(e)) from None
    else:
        variables = default.variables_and_weights()

    if 'numbers' in data:
        numbers = []
        for value, weight in _pairs(data['numbers'], 'numbers'):
            try:
                numbers.append((NumberLiteral(value), weight))
            except TypeError as e:
                raise CatalogueError(str(e)) from None
    else:
        numbers = default.numbers_and_weights()

    if 'operations' in data:
        if not isinstance(data['operations'], list):
            raise CatalogueError("'operations' must be a list")
        operation_types = [_parse_operation(entry) for entry in data['operations']]
    else:
        operation_types = default.operation_types_and_weights()

    category_weights = data.get('category_weights', default.category_weights)
    if not isinstance(category_weights, dict):
        raise CatalogueError("'category_weights' must be an object")

    return Catalogue(variables, operation_types, numbers, category_weights)


@dataclass
class GeneratorConfig:
    """Settings for one corpus generation run"""
    depth: int = 10
    amount: int = 10000
    seed: Optional[int] = None
    n_workers: int = 1
    chunk_size: int = 500
    output_path: Optional[str] = None
    output_dir: str = "."
    show_progress: bool = True
    catalogue: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        for name in ('depth', 'amount', 'n_workers', 'chunk_size'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative, got {self.amount}")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be a positive integer, got {self.n_workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be a positive integer, got {self.chunk_size}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ValueError(f"seed must be an integer or null, got {self.seed!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratorConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json_file(cls, path: str) -> 'GeneratorConfig':
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a JSON object")
        return cls.from_dict(data)

    def to_catalogue(self) -> Catalogue:
        return catalogue_from_dict(self.catalogue)
