import pytest

from xelement.registry import ElementRegistry


@pytest.fixture(autouse=True)
def _clean_xel_env(monkeypatch):
    """Keep tests independent of the caller's XEL_* environment."""
    for name in ("XEL_EXTERNAL_WRITES", "XEL_LOG_LEVEL", "XEL_DEFINITIONS"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def registry():
    reg = ElementRegistry()
    reg.define("my-element", {"a": {"type": "string", "default": ""}, "b": {"type": "string", "default": ""}})
    return reg
