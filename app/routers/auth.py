from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordRequestForm

from app.core.config import get_settings
from app.core.dependencies import get_store
from app.models.schemas import UserCreate, Token
from app.services.persistence import KeyValueStore
from app.services.planner_service import start_session
from app.services.supabase_client import get_supabase

router = APIRouter(
    tags=["Authentication"]
)

FRONTEND_URLS = {
    "dev": "http://localhost:5173",
    "prod": "https://plateiq.app",
}


@router.post("/signup", status_code=201, response_model=dict)
def sign_up(user_credentials: UserCreate):
    """
    Registers a new user with Supabase Auth. Profile and saved recipes start
    empty and are created on first use.
    """
    environment = get_settings().environment
    frontend_url = FRONTEND_URLS.get(environment, FRONTEND_URLS["dev"])

    try:
        response = get_supabase().auth.sign_up({
            "email": user_credentials.email,
            "password": user_credentials.password,
            "options": {
                "email_redirect_to": f"{frontend_url}/login",
                "data": {"name": user_credentials.name}
            }
        })
    except Exception as e:
        print(f"❌ Signup failed: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))

    if not response.user:
        raise HTTPException(status_code=400, detail="Could not create user for an unknown reason.")

    print(f"✅ User created: {user_credentials.email}")
    return {"message": "User created successfully. Please check your email for verification."}


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    store: KeyValueStore = Depends(get_store),
):
    """
    Handles user login with form data (username = email) and returns a bearer
    token. Each login starts a new session, which clears the previous fast.
    """
    try:
        response = get_supabase().auth.sign_in_with_password({
            "email": form_data.username,
            "password": form_data.password
        })
    except Exception:
        raise HTTPException(
            status_code=401,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        start_session(store, str(response.user.id))
    except Exception as e:
        print(f"❌ Failed to start session for {form_data.username}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error starting session: {str(e)}")

    return {
        "access_token": response.session.access_token,
        "token_type": "bearer"
    }
