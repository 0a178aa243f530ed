import threading
from collections import OrderedDict
from typing import Optional

from app.core.errors import GenerationFailed, SupersededRequest
from app.models.profile_logic import normalize_fasting, profile_from_storage, profile_to_storage
from app.models.schemas import DietPlan, Profile, StoreList
from app.services.genai_client import TextGenerator
from app.services.persistence import PROFILE_KEY, KeyValueStore
from app.services.request_builder import (
    GenerationRequest,
    RequestKind,
    build_diet_plan_request,
    build_store_request,
)
from app.services.response_validator import validate_response


class RequestSequencer:
    """
    Hands out increasing sequence numbers per request kind so that only the
    most recently started request of each kind may deliver its result.
    """

    def __init__(self):
        self._latest: dict[RequestKind, int] = {}
        self._lock = threading.Lock()

    def begin(self, kind: RequestKind) -> int:
        with self._lock:
            sequence = self._latest.get(kind, 0) + 1
            self._latest[kind] = sequence
            return sequence

    def latest(self, kind: RequestKind) -> int:
        with self._lock:
            return self._latest.get(kind, 0)

    def is_latest(self, kind: RequestKind, sequence: int) -> bool:
        return self.latest(kind) == sequence


class SessionRegistry:
    """
    One request sequencer per user session, for the most recently active
    users. The least recently used sequencer is dropped once max_sessions is
    exceeded; that user's next request starts a fresh sequence.
    """

    def __init__(self, max_sessions: int = 10_000):
        self.max_sessions = max_sessions
        self._sequencers: OrderedDict[str, RequestSequencer] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._sequencers)

    def sequencer_for(self, user_id: str) -> RequestSequencer:
        with self._lock:
            if user_id in self._sequencers:
                self._sequencers.move_to_end(user_id)
            else:
                self._sequencers[user_id] = RequestSequencer()
                while len(self._sequencers) > self.max_sessions:
                    self._sequencers.popitem(last=False)
            return self._sequencers[user_id]


class DietPlanner:
    """Runs a request through the generator and validator for one session."""

    def __init__(self, generator: TextGenerator, sequencer: Optional[RequestSequencer] = None):
        self.generator = generator
        self.sequencer = sequencer or RequestSequencer()

    def _drop_if_stale(self, kind: RequestKind, sequence: int) -> None:
        latest = self.sequencer.latest(kind)
        if latest != sequence:
            print(f"⚠️ Dropping {kind.value} response #{sequence}; request #{latest} is newer")
            raise SupersededRequest(kind.value, sequence, latest)

    def run(self, request: GenerationRequest):
        sequence = self.sequencer.begin(request.kind)
        print(f"📋 Starting {request.kind.value} request #{sequence}")

        try:
            raw_text = self.generator.generate(request.prompt, request.response_schema)
        except GenerationFailed as e:
            self._drop_if_stale(request.kind, sequence)
            raise e
        except Exception as e:
            self._drop_if_stale(request.kind, sequence)
            raise GenerationFailed(str(e))

        self._drop_if_stale(request.kind, sequence)
        result = validate_response(request.kind, raw_text)
        print(f"✅ {request.kind.value} request #{sequence} returned {len(result)} item(s)")
        return result

    def generate_diet_plan(self, profile: Profile) -> DietPlan:
        return self.run(build_diet_plan_request(profile))

    def find_grocery_stores(self, city: str) -> StoreList:
        return self.run(build_store_request(city))


def load_profile(store: KeyValueStore, user_id: str) -> Optional[Profile]:
    return profile_from_storage(store.load(user_id, PROFILE_KEY))


def save_profile(store: KeyValueStore, user_id: str, profile: Profile) -> Profile:
    """Store a profile, dropping a fast its religion does not offer. Returns what was stored."""
    profile = normalize_fasting(profile)
    store.save(user_id, PROFILE_KEY, profile_to_storage(profile))
    return profile


def start_session(store: KeyValueStore, user_id: str) -> Optional[Profile]:
    """
    Begin a fresh session for a user who just signed in: the saved profile is
    kept but any fast chosen in an earlier session is cleared.
    """
    profile = profile_from_storage(store.load(user_id, PROFILE_KEY), reset_fasting=True)
    if profile is not None:
        save_profile(store, user_id, profile)
    return profile
