import bisect
import numpy as np
import numba
from typing import Any, List, Optional, Sequence

from .errors import InvalidDistributionError


@numba.njit(cache=True)
def _search_cumulative(cumulative, uniforms, last_positive):
  # First index whose cumulative weight exceeds u; zero-weight slots are never hit
  out = np.empty(uniforms.shape[0], dtype=np.int64)
  n = cumulative.shape[0]
  for k in range(uniforms.shape[0]):
    u = uniforms[k]
    lo = 0
    hi = n - 1
    while lo < hi:
      mid = (lo + hi) // 2
      if cumulative[mid] > u:
        hi = mid
      else:
        lo = mid + 1
    out[k] = min(lo, last_positive)
  return out


class CategoricalDistribution:
  """Validated categorical distribution over a fixed item sequence"""

  __slots__ = ('items', 'weights', '_cumulative', '_cumulative_list', '_total', '_last_positive')

  def __init__(self, items: Sequence[Any], weights: Sequence[float]):
    items = tuple(items)
    try:
      weight_array = np.asarray(weights, dtype=np.float64)
    except (TypeError, ValueError) as e:
      raise InvalidDistributionError(f"Weights must be numeric: {e}") from None

    if weight_array.ndim != 1:
      raise InvalidDistributionError("Weights must be a flat sequence")
    if len(items) == 0:
      raise InvalidDistributionError("Cannot sample from an empty sequence")
    if len(items) != weight_array.shape[0]:
      raise InvalidDistributionError(
        f"Got {len(items)} items but {weight_array.shape[0]} weights"
      )
    if not np.all(np.isfinite(weight_array)):
      raise InvalidDistributionError("Weights must be finite")
    if np.any(weight_array < 0):
      raise InvalidDistributionError("Weights must be non-negative")

    cumulative = np.cumsum(weight_array)
    total = float(cumulative[-1])
    if total <= 0:
      raise InvalidDistributionError("At least one weight must be positive")

    self.items = items
    self.weights = weight_array
    self._cumulative = cumulative
    self._cumulative_list = cumulative.tolist()
    self._total = total
    self._last_positive = int(np.flatnonzero(weight_array > 0)[-1])

  @property
  def probabilities(self) -> np.ndarray:
    return self.weights / self._total

  def __len__(self) -> int:
    return len(self.items)

  def index_for(self, u: float) -> int:
    """Map a uniform draw on [0, 1) to an item index"""
    index = bisect.bisect_right(self._cumulative_list, u * self._total)
    return min(index, self._last_positive)

  def indices_for(self, uniforms: np.ndarray) -> np.ndarray:
    return _search_cumulative(self._cumulative, uniforms * self._total, self._last_positive)


class WeightedSampler:
  """Weighted choice with replacement over an explicit random stream"""

  def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
    if rng is not None and seed is not None:
      raise ValueError("Pass either seed or rng, not both")
    self.rng = rng if rng is not None else np.random.default_rng(seed)

  def sample(self, distribution: CategoricalDistribution) -> Any:
    return distribution.items[distribution.index_for(self.rng.random())]

  def sample_many(self, distribution: CategoricalDistribution, n: int) -> List[Any]:
    if n < 0:
      raise ValueError(f"Number of draws must be non-negative, got {n}")
    if n == 0:
      return []
    indices = distribution.indices_for(self.rng.random(n))
    items = distribution.items
    return [items[i] for i in indices]

  def draw(self, items: Sequence[Any], weights: Sequence[float]) -> Any:
    return self.sample(CategoricalDistribution(items, weights))

  def draw_many(self, items: Sequence[Any], weights: Sequence[float], n: int) -> List[Any]:
    return self.sample_many(CategoricalDistribution(items, weights), n)


def weighted_choice(items: Sequence[Any], weights: Sequence[float],
                    rng: Optional[np.random.Generator] = None) -> Any:
  """Draw one item; a fresh unseeded stream is used when rng is None"""
  return WeightedSampler(rng=rng).draw(items, weights)


def weighted_choices(items: Sequence[Any], weights: Sequence[float], n: int,
                     rng: Optional[np.random.Generator] = None) -> List[Any]:
  """Draw n items independently with replacement"""
  return WeightedSampler(rng=rng).draw_many(items, weights, n)
