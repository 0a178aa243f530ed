import pytest

from app.models.schemas import Meal
from app.services.persistence import SAVED_RECIPES_KEY, InMemoryKeyValueStore
from app.services.saved_recipes import SavedRecipes

from conftest import meal


@pytest.fixture
def saved(store_backend):
    return SavedRecipes(store_backend).activate("user-a")


def test_add_is_idempotent_by_dish_name(saved):
    first = Meal.model_validate(meal("Poha", 350))

    assert saved.add(first) is True
    assert saved.add(Meal.model_validate(meal("Poha", 999))) is False

    assert saved.recipes == [first]
    assert saved.recipes[0].calories == 350


def test_add_preserves_insertion_order(saved):
    for name in ["Upma", "Idli", "Poha"]:
        saved.add(Meal.model_validate(meal(name)))

    assert [recipe.dish_name for recipe in saved.recipes] == ["Upma", "Idli", "Poha"]


def test_remove_twice_is_a_no_op(saved, store_backend):
    saved.add(Meal.model_validate(meal("Poha")))
    saved.add(Meal.model_validate(meal("Upma")))

    assert saved.remove("Poha") is True
    snapshot = store_backend.load("user-a", SAVED_RECIPES_KEY)
    assert saved.remove("Poha") is False

    assert [recipe.dish_name for recipe in saved.recipes] == ["Upma"]
    assert store_backend.load("user-a", SAVED_RECIPES_KEY) == snapshot


def test_every_mutation_is_persisted(saved, store_backend):
    saved.add(Meal.model_validate(meal("Poha")))

    assert store_backend.load("user-a", SAVED_RECIPES_KEY) == [meal("Poha")]

    saved.remove("Poha")

    assert store_backend.load("user-a", SAVED_RECIPES_KEY) == []


def test_switching_user_reloads_without_leaking(store_backend):
    saved = SavedRecipes(store_backend).activate("user-a")
    saved.add(Meal.model_validate(meal("Poha")))

    saved.activate("user-b")
    assert saved.recipes == []
    saved.add(Meal.model_validate(meal("Dosa")))

    saved.activate("user-a")
    assert [recipe.dish_name for recipe in saved.recipes] == ["Poha"]


def test_reactivating_same_user_keeps_memory(saved, store_backend):
    saved.add(Meal.model_validate(meal("Poha")))
    store_backend.save("user-a", SAVED_RECIPES_KEY, [])

    saved.activate("user-a")

    assert saved.contains("Poha")


def test_new_user_starts_empty():
    saved = SavedRecipes(InMemoryKeyValueStore()).activate("brand-new")

    assert len(saved) == 0
    assert not saved.contains("Poha")


def test_malformed_stored_entries_are_skipped(store_backend):
    store_backend.save("user-a", SAVED_RECIPES_KEY, [meal("Poha"), {"dishName": "Broken"}, "junk"])

    saved = SavedRecipes(store_backend).activate("user-a")

    assert [recipe.dish_name for recipe in saved.recipes] == ["Poha"]


def test_mutation_needs_active_user(store_backend):
    with pytest.raises(RuntimeError):
        SavedRecipes(store_backend).add(Meal.model_validate(meal("Poha")))
