"""Exceptions raised by the standings simulator."""


class ConfigurationError(ValueError):
    """Invalid simulation parameters; raised before any simulation work."""


class DataError(ValueError):
    """Malformed standings or scoring input."""


class SimulationCancelled(RuntimeError):
    """Aggregation stopped by a cancel event; no partial result is produced."""
