import json
from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_generator, get_store
from app.core.errors import GenerationFailed
from app.core.security import get_current_user_id
from app.main import app
from app.models.schemas import Profile
from app.services.persistence import InMemoryKeyValueStore

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class FakeGenerator:
    """Returns queued responses in order; an Exception in the queue is raised."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def generate(self, prompt, response_schema):
        self.calls.append((prompt, response_schema))
        if not self.responses:
            raise GenerationFailed("No response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def meal(dish_name="Poha", calories=350, **overrides):
    data = {
        "dishName": dish_name,
        "calories": calories,
        "ingredients": ["1 cup poha", "1 onion", "2 tbsp peanuts"],
        "instructions": "Rinse the poha, temper the spices and mix.",
    }
    data.update(overrides)
    return data


def day_plan(day, theme=None):
    data = {
        "day": day,
        "meals": {
            "breakfast": meal(f"{day} Poha", 350),
            "lunch": meal(f"{day} Dal Khichdi", 550),
            "dinner": meal(f"{day} Paneer Tikka", 500),
        },
        "totalCalories": 1400,
    }
    if theme:
        data["theme"] = theme
    return data


def diet_plan_payload(days=DAYS):
    return [day_plan(day) for day in days]


def store(name="BigBasket Koramangala"):
    return {
        "Name": name,
        "URL": "https://www.bigbasket.com",
        "Timing": "6 AM - 11 PM",
        "Address": "80 Feet Road, Koramangala, Bengaluru",
        "Offer": "10% off on fresh produce",
        "Ratings": "4.3",
    }


def store_payload(count=3):
    return [store(f"BigBasket Store {i + 1}") for i in range(count)]


@pytest.fixture
def profile():
    return Profile(
        age=30,
        sex="Female",
        weight=62,
        height=160,
        allergies="",
        health_issues=["Diabetes"],
        cuisine="South Indian",
        food_type="Veg",
        budget="400-600",
        city="Bengaluru",
        current_date=date(2025, 10, 18),
        meal_timing="Standard",
    )


@pytest.fixture
def store_backend():
    return InMemoryKeyValueStore()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def current_user():
    # Mutable so a test can switch the signed-in user mid-way
    return {"id": "user-a"}


@pytest.fixture
def client(store_backend, generator, current_user):
    app.dependency_overrides[get_current_user_id] = lambda: current_user["id"]
    app.dependency_overrides[get_store] = lambda: store_backend
    app.dependency_overrides[get_generator] = lambda: generator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def diet_plan_json():
    return json.dumps(diet_plan_payload())


@pytest.fixture
def stores_json():
    return json.dumps(store_payload())
