import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None
    environment: str = "dev"


@lru_cache
def get_settings() -> Settings:
    """Read settings from the environment (and .env) once per process."""
    load_dotenv()
    return Settings(
        gemini_api_key=os.environ.get("GEMINI_API_KEY"),
        gemini_model=os.environ.get("GEMINI_MODEL", "gemini-2.5-flash"),
        supabase_url=os.environ.get("SUPABASE_URL"),
        supabase_service_key=os.environ.get("SUPABASE_SERVICE_KEY"),
        environment=os.getenv("ENVIRONMENT", "dev"),
    )
