import threading
from copy import deepcopy
from typing import Any, Optional, Protocol

from supabase import Client

PROFILE_KEY = "plateiq-user-profile"
SAVED_RECIPES_KEY = "plateiq-saved-recipes"


class KeyValueStore(Protocol):
    """Per-user key-value storage for profile and saved-recipe records."""

    def load(self, user_id: str, key: str) -> Optional[Any]:
        ...

    def save(self, user_id: str, key: str, value: Any) -> None:
        ...


class InMemoryKeyValueStore:
    def __init__(self):
        self._data: dict[tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    def load(self, user_id: str, key: str) -> Optional[Any]:
        with self._lock:
            return deepcopy(self._data.get((user_id, key)))

    def save(self, user_id: str, key: str, value: Any) -> None:
        with self._lock:
            self._data[(user_id, key)] = deepcopy(value)


class SupabaseKeyValueStore:
    """
    Stores each record as a JSON value in the `user_storage` table, one row
    per (user_id, key).
    """

    table_name = "user_storage"

    def __init__(self, client: Client):
        self.client = client

    def load(self, user_id: str, key: str) -> Optional[Any]:
        response = self.client.table(self.table_name)\
            .select('value')\
            .eq('user_id', user_id)\
            .eq('key', key)\
            .limit(1)\
            .execute()

        if response.data and len(response.data) > 0:
            return response.data[0]['value']
        return None

    def save(self, user_id: str, key: str, value: Any) -> None:
        self.client.table(self.table_name)\
            .upsert({
                'user_id': user_id,
                'key': key,
                'value': value,
                'updated_at': 'now()',
            }, on_conflict='user_id,key')\
            .execute()
