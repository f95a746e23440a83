import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from dinner_menu import main
from dinner_menu.config import settings
from dinner_menu.services.rate_limit import SlidingWindowRateLimiter, get_rate_limiter
from dinner_menu.storage import db as db_module

WEEK = [
    ("Monday", "Lemon Garlic Chicken", "Pan-seared chicken thighs with lemon and garlic."),
    ("Tuesday", "Black Bean Tacos", "Corn tortillas with spiced black beans and salsa."),
    ("Wednesday", "Shrimp Fried Rice", "Day-old rice tossed with shrimp, egg, and peas."),
    ("Thursday", "Pesto Pasta", "Penne with basil pesto and cherry tomatoes."),
    ("Friday", "Sheet Pan Salmon", "Roasted salmon with broccoli and potatoes."),
    ("Saturday", "Beef Stir Fry", "Sliced beef with peppers in a ginger soy sauce."),
    ("Sunday", "Vegetable Curry", "Chickpeas and vegetables simmered in coconut curry."),
]


def make_menu(days=WEEK) -> list[dict]:
    return [
        {"day": day, "meal_name": name, "simple_description": desc}
        for day, name, desc in days
    ]


def menu_text(items=None) -> str:
    return json.dumps(make_menu() if items is None else items)


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="limiter")
def limiter_fixture():
    return SlidingWindowRateLimiter(limit=10, window_seconds=60)


@pytest.fixture(name="api_key")
def api_key_fixture(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    return "test-key"


@pytest.fixture(name="fake_llm")
def fake_llm_fixture(monkeypatch):
    """Replace the model call. Set `.response` to the text, or `.error` to an exception."""

    class FakeLLM:
        def __init__(self) -> None:
            self.response = menu_text()
            self.error = None
            self.prompts = []

        def __call__(self, prompt_name, prompt_version, fn, **kwargs):
            self.prompts.append(kwargs.get("prompt"))
            if self.error is not None:
                raise self.error
            return self.response

    fake = FakeLLM()
    monkeypatch.setattr("dinner_menu.services.menu.generator.run_with_logging", fake)
    return fake


@pytest.fixture(name="client")
def client_fixture(monkeypatch, engine, limiter):
    def _get_session_override():
        return Session(engine)

    monkeypatch.setattr(db_module, "engine", engine)
    monkeypatch.setattr("dinner_menu.services.llm.dspy_client.get_session", _get_session_override)
    main.app.dependency_overrides[get_rate_limiter] = lambda: limiter

    client = TestClient(main.app)
    yield client
    main.app.dependency_overrides.clear()


@pytest.fixture(name="week_menu")
def week_menu_fixture():
    return make_menu()
