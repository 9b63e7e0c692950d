import pytest

from lexpos.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()
