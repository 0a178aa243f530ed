from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.core.dependencies import get_saved_recipes
from app.models.schemas import Meal
from app.services.saved_recipes import SavedRecipes

router = APIRouter(
    prefix="/recipes",
    tags=["Saved Recipes"]
)


def _listing(saved: SavedRecipes) -> dict:
    return {
        "count": len(saved),
        "recipes": [meal.model_dump(mode="json", by_alias=True) for meal in saved.recipes],
    }


@router.get("/saved", response_class=JSONResponse)
def list_saved_recipes(saved: SavedRecipes = Depends(get_saved_recipes)):
    return {"status": "success", **_listing(saved)}


@router.post("/saved", response_class=JSONResponse)
def save_recipe(meal: Meal, saved: SavedRecipes = Depends(get_saved_recipes)):
    """
    Save a meal. A meal whose dish name is already saved is left as it was,
    even if the rest of its content differs.
    """
    try:
        added = saved.add(meal)
    except Exception as e:
        print(f"❌ Failed to save recipe '{meal.dish_name}': {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to save recipe: {str(e)}")

    return {"status": "success", "added": added, **_listing(saved)}


@router.delete("/saved/{dish_name:path}", response_class=JSONResponse)
def remove_recipe(dish_name: str, saved: SavedRecipes = Depends(get_saved_recipes)):
    """Remove a saved meal by dish name. Dish names may contain slashes ('Idli/Dosa')."""
    try:
        removed = saved.remove(dish_name)
    except Exception as e:
        print(f"❌ Failed to remove recipe '{dish_name}': {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to remove recipe: {str(e)}")

    return {"status": "success", "removed": removed, **_listing(saved)}
