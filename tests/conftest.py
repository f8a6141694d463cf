import pytest

from handcalc.logging import setup_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    setup_logging(level="WARNING", json_mode=False)
