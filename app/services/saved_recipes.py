from typing import Optional

from pydantic import ValidationError

from app.models.schemas import Meal
from app.services.persistence import SAVED_RECIPES_KEY, KeyValueStore


class SavedRecipes:
    """
    The active user's saved recipes: an insertion-ordered set of meals keyed
    by dish name. Every mutation is written through to the store, and
    switching users reloads the set so one user's recipes never leak into
    another's.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.user_id: Optional[str] = None
        self._recipes: list[Meal] = []

    def activate(self, user_id: str) -> "SavedRecipes":
        if user_id != self.user_id:
            self.user_id = user_id
            self._recipes = self._load(user_id)
        return self

    def _load(self, user_id: str) -> list[Meal]:
        stored = self.store.load(user_id, SAVED_RECIPES_KEY) or []
        if not isinstance(stored, list):
            print(f"⚠️ Saved recipes for {user_id} are not a list, starting empty")
            return []

        recipes = []
        for entry in stored:
            try:
                recipes.append(Meal.model_validate(entry))
            except ValidationError:
                print(f"⚠️ Skipping malformed saved recipe for {user_id}: {str(entry)[:100]}")
        return recipes

    def _persist(self) -> None:
        self.store.save(
            self.user_id,
            SAVED_RECIPES_KEY,
            [meal.model_dump(mode="json", by_alias=True) for meal in self._recipes],
        )

    def _require_user(self) -> None:
        if self.user_id is None:
            raise RuntimeError("No active user; call activate() first")

    @property
    def recipes(self) -> list[Meal]:
        return list(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def contains(self, dish_name: str) -> bool:
        return any(meal.dish_name == dish_name for meal in self._recipes)

    def add(self, meal: Meal) -> bool:
        """Save a meal unless one with the same dish name is already saved."""
        self._require_user()
        if self.contains(meal.dish_name):
            return False
        self._recipes.append(meal)
        self._persist()
        return True

    def remove(self, dish_name: str) -> bool:
        self._require_user()
        remaining = [meal for meal in self._recipes if meal.dish_name != dish_name]
        if len(remaining) == len(self._recipes):
            return False
        self._recipes = remaining
        self._persist()
        return True
