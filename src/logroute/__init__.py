"""
logroute: log output routing and rotation for service telemetry.
"""

__version__ = "0.1.0"
