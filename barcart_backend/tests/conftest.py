from __future__ import annotations
import pytest
from fastapi.testclient import TestClient
from barcart_backend.app.main import app
from barcart_backend.app.schemas import GeneratedDrink, Ingredient, Recipe, Wood

# --- Client used by API contract tests ---
@pytest.fixture(scope="session")
def client():
    return TestClient(app)

# --- Data tree override: every test gets an empty DATA_DIR ---
@pytest.fixture(autouse=True)
def tmp_data_tree(tmp_path, monkeypatch):
    data = tmp_path / "data"
    data.mkdir()
    monkeypatch.setenv("DATA_DIR", str(data))
    monkeypatch.delenv("BARCART_RECIPES_PATH", raising=False)
    return data

# --- Small builders ---
@pytest.fixture
def make_recipe():
    counter = {"n": 0}

    def _make(name=None, category="alcoholic", ingredients=("Gin", "Tonic Water"), tags=(), **extra):
        counter["n"] += 1
        rid = f"r{counter['n']}"
        return Recipe(
            id=rid,
            name=name or f"Recipe {counter['n']}",
            category=category,
            ingredients=[i if isinstance(i, (dict, Ingredient)) else {"name": i} for i in ingredients],
            tags=list(tags),
            **extra,
        )
    return _make

@pytest.fixture
def make_drink():
    def _make(*ingredients, category="mocktail"):
        return GeneratedDrink(
            id="test",
            name="Test Drink",
            category=category,
            ingredients=[i if isinstance(i, Ingredient) else Ingredient(name=i) for i in ingredients],
        )
    return _make

@pytest.fixture
def oak():
    return Wood(
        name="Oak",
        intensity="medium",
        time_max=12,
        best_with_drink_tags=["whiskey", "bourbon"],
        best_with_food_tags=["beef", "steak"],
        avoid_with_drink_tags=["delicate"],
        is_in_my_kit=True,
    )

@pytest.fixture
def alder():
    return Wood(
        name="Alder",
        intensity="light",
        time_max=15,
        best_with_drink_tags=["gin", "vodka"],
        best_with_food_tags=["fish"],
    )

class ReverseShuffle:
    """Deterministic stand-in for random.Random: 'shuffles' by reversing."""
    def __init__(self):
        self.calls = 0

    def shuffle(self, x):
        self.calls += 1
        x.reverse()

@pytest.fixture
def reverse_rng():
    return ReverseShuffle()
