from functools import lru_cache

from supabase import create_client, Client

from app.core.config import get_settings


@lru_cache
def get_supabase() -> Client:
    settings = get_settings()
    url: str = settings.supabase_url
    key: str = settings.supabase_service_key

    if not url or not key:
        raise EnvironmentError("Supabase URL and Key must be set in .env file")

    return create_client(url, key)
