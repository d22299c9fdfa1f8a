import pytest

from logroute.logging import SinkRegistry


@pytest.fixture
def registry() -> SinkRegistry:
    """
    Function-scoped sink registry.
    Keeps schemes registered by one test out of the process-wide registry.
    """
    return SinkRegistry()


@pytest.fixture
def not_windows(monkeypatch):
    """Force the POSIX branch of destination handling regardless of host OS."""
    monkeypatch.setattr("sys.platform", "linux")
