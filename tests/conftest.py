import os
import pytest
from rastersample.config import get_settings

def pytest_configure():
    os.environ.setdefault("RSAMPLE_LOG_LEVEL", "WARNING")

@pytest.fixture(autouse=True)
def _reset_settings_cache():
    # evita fuga de estado entre tests
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

@pytest.fixture
def example_raster():
    from tests.factories import make_example_raster
    return make_example_raster()
