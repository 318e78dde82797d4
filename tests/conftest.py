import pytest

from abbreviator.core.registry import build_registry
from abbreviator.core.store import MemoryStore

FUBAR_MEANING = "Fouled Up Beyond All Recognition"
SNAFU_MEANING = "Situation Normal, All Fouled Up"

FUBAR_TAG = f'<abbr title="{FUBAR_MEANING}">FUBAR</abbr>'
SNAFU_TAG = f'<abbr title="{SNAFU_MEANING}">SNAFU</abbr>'


@pytest.fixture
def registry():
    return build_registry([("FUBAR", FUBAR_MEANING), ("SNAFU", SNAFU_MEANING)])


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "ABBREVIATOR_ABBREVIATIONS_FILE",
        "ABBREVIATOR_OPTION_PREFIX",
        "ABBREVIATOR_STORE_PATH",
        "ABBREVIATOR_CACHE",
        "ABBREVIATOR_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
