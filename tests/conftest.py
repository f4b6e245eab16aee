import pytest

from tests.helpers import EchoApp


@pytest.fixture
def echo_app():
    return EchoApp()


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    from hubsig.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
