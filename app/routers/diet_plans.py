from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.core.dependencies import get_planner, get_store
from app.core.errors import GenerationFailed, InvalidProfile, MalformedResponse, SupersededRequest
from app.core.security import get_current_user_id
from app.models.schemas import Profile, StoreLookupRequest
from app.services.persistence import KeyValueStore
from app.services.planner_service import DietPlanner, load_profile, save_profile

router = APIRouter(
    prefix="/plans",
    tags=["Diet Plans"]
)


def _require_profile(store: KeyValueStore, user_id: str) -> Profile:
    profile = load_profile(store, user_id)
    if profile is None:
        raise HTTPException(
            status_code=404,
            detail="Profile not found. Please complete your profile first."
        )
    return profile


@router.post("/generate", response_class=JSONResponse)
def generate_diet_plan(
    profile: Optional[Profile] = None,
    user_id: str = Depends(get_current_user_id),
    store: KeyValueStore = Depends(get_store),
    planner: DietPlanner = Depends(get_planner),
):
    """
    Generate a 7-day diet plan from the submitted profile, or from the saved
    profile when no body is sent. The profile is saved once a plan has been
    generated successfully.
    """
    try:
        if profile is None:
            profile = _require_profile(store, user_id)

        print(f"📋 Generating diet plan for user: {user_id}")
        diet_plan = planner.generate_diet_plan(profile)

        save_profile(store, user_id, profile)
        print(f"✅ Diet plan generated for user: {user_id}")

        return {
            "status": "success",
            "diet_plan": [day.model_dump(mode="json", by_alias=True, exclude_none=True) for day in diet_plan],
        }

    except HTTPException:
        raise
    except InvalidProfile as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SupersededRequest as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (MalformedResponse, GenerationFailed) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        print(f"❌ Error generating diet plan: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error generating diet plan: {str(e)}")


@router.post("/stores", response_class=JSONResponse)
def find_grocery_stores(
    request: Optional[StoreLookupRequest] = None,
    user_id: str = Depends(get_current_user_id),
    store: KeyValueStore = Depends(get_store),
    planner: DietPlanner = Depends(get_planner),
):
    """
    Find 3-5 grocery stores in a city. Uses the saved profile's city when the
    request does not name one.
    """
    try:
        city = request.city if request else None
        if not city:
            city = _require_profile(store, user_id).city

        print(f"🛒 Looking up grocery stores in '{city}' for user: {user_id}")
        stores = planner.find_grocery_stores(city)

        return {
            "status": "success",
            "city": city.strip(),
            "stores": [item.model_dump(mode="json", by_alias=True) for item in stores],
        }

    except HTTPException:
        raise
    except InvalidProfile as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SupersededRequest as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (MalformedResponse, GenerationFailed) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        print(f"❌ Error finding grocery stores: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Could not fetch store data: {str(e)}")
