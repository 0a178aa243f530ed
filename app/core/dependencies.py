from fastapi import Depends

from app.core.security import get_current_user_id
from app.services.genai_client import GeminiGenerator, TextGenerator
from app.services.persistence import KeyValueStore, SupabaseKeyValueStore
from app.services.planner_service import DietPlanner, SessionRegistry
from app.services.saved_recipes import SavedRecipes
from app.services.supabase_client import get_supabase

session_registry = SessionRegistry()

_generator = None


def get_store() -> KeyValueStore:
    return SupabaseKeyValueStore(get_supabase())


def get_generator() -> TextGenerator:
    global _generator
    if _generator is None:
        _generator = GeminiGenerator()
    return _generator


def get_planner(
    user_id: str = Depends(get_current_user_id),
    generator: TextGenerator = Depends(get_generator),
) -> DietPlanner:
    return DietPlanner(generator, session_registry.sequencer_for(user_id))


def get_saved_recipes(
    user_id: str = Depends(get_current_user_id),
    store: KeyValueStore = Depends(get_store),
) -> SavedRecipes:
    return SavedRecipes(store).activate(user_id)
