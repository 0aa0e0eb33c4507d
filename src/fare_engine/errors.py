"""Contract-violation errors raised by the pure core.

User-correctable input problems are not exceptions; see
``fare_engine.engine.validation``.
"""


class FareEngineError(ValueError):
    """Base class for malformed or out-of-domain values reaching the core."""


class InvalidMeasurement(FareEngineError):
    """Route telemetry the classifier cannot interpret (zero duration, no segments)."""


class InvalidInput(FareEngineError):
    """Trip input outside the fare engine's domain (non-positive distance, factor < 1.0)."""
