from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.core.dependencies import get_store
from app.core.errors import InvalidProfile
from app.core.security import get_current_user_id
from app.models.profile_logic import profile_to_storage, update_profile_field
from app.models.schemas import Profile, ProfileFieldUpdate
from app.services.persistence import KeyValueStore
from app.services.planner_service import load_profile, save_profile

router = APIRouter(
    tags=["Profile"]
)


@router.get("/profile", response_class=JSONResponse)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    store: KeyValueStore = Depends(get_store),
):
    """Get the current user's profile."""
    try:
        profile = load_profile(store, user_id)
        if profile is None:
            raise HTTPException(
                status_code=404,
                detail="Profile not found. Please complete your profile first."
            )

        return {
            "status": "success",
            "profile": profile_to_storage(profile)
        }

    except HTTPException:
        raise
    except Exception as e:
        print(f"❌ Error retrieving profile: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Error retrieving profile: {str(e)}"
        )


@router.put("/profile", response_class=JSONResponse)
def replace_profile(
    profile: Profile,
    user_id: str = Depends(get_current_user_id),
    store: KeyValueStore = Depends(get_store),
):
    """Replace the saved profile as a whole."""
    try:
        profile = save_profile(store, user_id, profile)
        print(f"✅ Profile saved successfully for user {user_id}")

        return {
            "status": "success",
            "message": "Profile saved successfully",
            "profile": profile_to_storage(profile)
        }

    except Exception as e:
        print(f"❌ Error saving profile: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Error saving profile: {str(e)}"
        )


@router.patch("/profile", response_class=JSONResponse)
def update_profile(
    update: ProfileFieldUpdate,
    user_id: str = Depends(get_current_user_id),
    store: KeyValueStore = Depends(get_store),
):
    """
    Change a single profile field. Changing the religion also resets the
    fasting mode to "None".
    """
    try:
        profile = load_profile(store, user_id)
        if profile is None:
            raise HTTPException(
                status_code=404,
                detail="Profile not found. Please complete your profile first."
            )

        updated = update_profile_field(profile, update.field, update.value)
        if updated != profile:
            save_profile(store, user_id, updated)
            print(f"📝 Updated '{update.field}' for user {user_id}")

        return {
            "status": "success",
            "profile": profile_to_storage(updated)
        }

    except HTTPException:
        raise
    except InvalidProfile as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        print(f"❌ Error updating profile: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Error updating profile: {str(e)}"
        )
