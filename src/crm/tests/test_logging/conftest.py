import pytest

from crm.config.settings import get_settings
from crm.core.logging.builder import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Tests here reconfigure global logging; put the suite's config back afterwards."""
    yield
    setup_logging(get_settings())
