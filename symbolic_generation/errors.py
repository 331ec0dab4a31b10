"""Exception hierarchy for expression generation."""


class GenerationError(Exception):
  """Base class for all generation failures"""


class InvalidDistributionError(GenerationError, ValueError):
  """A weighted catalogue is empty or has no positive weight"""


class InvalidDepthError(GenerationError, ValueError):
  """Negative depth passed to a generation call"""


class ArityMismatchError(GenerationError, RuntimeError):
  """Child count does not match the declared arity of an operation type"""


class CatalogueError(GenerationError, ValueError):
  """Malformed catalogue or configuration entry"""
