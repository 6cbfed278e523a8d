"""Garden exception hierarchy.

Centralised base classes so callers can catch garden failures narrowly
instead of relying on bare ``except Exception`` blocks.
"""


class GardenError(Exception):
    """Root of all garden domain exceptions."""


class InvalidRangeError(GardenError, ValueError):
    """A range with ``lo > hi`` was passed to a strict random generator."""


class ConfigurationError(GardenError):
    """Invalid or missing configuration."""


class ReentrantTickError(GardenError):
    """A frame tick was started while another tick was still running."""
