import pytest

from habla.application.phrases import PhraseCatalog
from habla.application.review_service import ReviewScheduler
from habla.domain.constants import DAY_MS
from habla.domain.models import Phrase
from habla.infrastructure.stores.memory import InMemoryProgressStore

NOW = 1_700_000_000_000


class FakeClock:
    """Settable epoch-ms clock."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance_days(self, days: float) -> None:
        self.now += int(days * DAY_MS)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def phrases():
    return [
        Phrase(id=1, text="Hola", english="Hello", category="basics"),
        Phrase(id=2, text="Buenos días", english="Good morning", category="basics"),
        Phrase(id=3, text="Gracias", english="Thank you", category="basics"),
    ]


@pytest.fixture
def catalog(phrases):
    return PhraseCatalog(phrases)


@pytest.fixture
def store():
    return InMemoryProgressStore()


@pytest.fixture
def scheduler(store, phrases, clock):
    return ReviewScheduler(store, phrases, clock=clock)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/progress files
    monkeypatch.setenv("HOME", str(home))
    return home
