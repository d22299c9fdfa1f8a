"""
Log file rotation.

``RotationPolicy`` carries the user's limits; ``RotationPolicy.new_writer``
turns a path into either a plain append-only file or a ``RotatingFileWriter``.
"""

from .engine import RotatingFileWriter
from .policy import RotationPolicy

__all__ = ["RotationPolicy", "RotatingFileWriter"]
