import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real config out of the tests"""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("GLOBZ_CONFIG", raising=False)
    yield
    # The CLI installs sinks bound to the runner's streams
    logger.remove()
