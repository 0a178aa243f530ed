from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from supabase_auth.errors import AuthApiError
from supabase_auth.types import UserResponse

from app.services.supabase_client import get_supabase

# Bearer token in the Authorization header; obtained from /token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/token")


def get_current_user(token: str = Depends(oauth2_scheme)) -> UserResponse:
    """
    FastAPI dependency: validates the bearer token with Supabase Auth and
    returns the user it belongs to, or answers 401.
    """
    try:
        response = get_supabase().auth.get_user(token)
    except AuthApiError:
        response = None

    if response is None or response.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return response


def get_current_user_id(current_user: UserResponse = Depends(get_current_user)) -> str:
    """The identifier every profile and saved-recipe record is scoped by."""
    return str(current_user.user.id)
