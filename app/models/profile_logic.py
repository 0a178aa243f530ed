from datetime import date
from typing import Any, Optional

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from app.core.errors import InvalidProfile
from app.models.schemas import NO_FAST, Profile, Religion

FASTING_OPTIONS_BY_RELIGION: dict[Religion, list[str]] = {
    Religion.NONE: [NO_FAST],
    Religion.HINDU: [
        NO_FAST,
        "Ekadashi",
        "Navratri",
        "Maha Shivaratri",
        "Pradosh Vrat",
        "Sankashti Chaturthi",
        "Karva Chauth",
        "Somvar (Monday) Vrat",
        "Shanivar (Saturday) Vrat",
        "Amavasya/Purnima",
        "Karthigai Vrat",
    ],
    Religion.MUSLIM: [NO_FAST, "Ramadan", "Sunnah (Mon/Thu)", "Ashura", "Fast of Arafah"],
    Religion.CHRISTIAN: [NO_FAST, "Lent", "Ash Wednesday", "Good Friday", "Fridays in Lent"],
    Religion.JAIN: [NO_FAST, "Paryushana", "Ayambil"],
}

# Accept both the JSON (camelCase) and the Python (snake_case) field names
_FIELD_NAMES = {}
for _name in Profile.model_fields:
    _FIELD_NAMES[_name] = _name
    _FIELD_NAMES[to_camel(_name)] = _name


def fasting_options_for(religion: Religion) -> list[str]:
    """Fasting observances that can be selected for a religion."""
    return FASTING_OPTIONS_BY_RELIGION.get(religion, [NO_FAST])


def is_valid_fasting_mode(religion: Religion, fasting_mode: str) -> bool:
    return fasting_mode in fasting_options_for(religion)


def normalize_fasting(profile: Profile) -> Profile:
    """Return the profile with a fast its religion does not offer reset to "None"."""
    if is_valid_fasting_mode(profile.religion, profile.fasting_mode):
        return profile
    print(f"⚠️ Resetting fasting mode '{profile.fasting_mode}' for religion '{profile.religion.value}'")
    return profile.model_copy(update={"fasting_mode": NO_FAST})


def _rebuild(profile: Profile, updates: dict[str, Any]) -> Profile:
    data = profile.model_dump()
    data.update(updates)
    try:
        return Profile.model_validate(data)
    except ValidationError as e:
        field = next(iter(updates))
        raise InvalidProfile(f"Invalid value for '{to_camel(field)}': {e.errors()[0]['msg']}", field=field)


def update_profile_field(profile: Profile, field: str, value: Any) -> Profile:
    """
    Return a new profile with one field changed.

    Changing the religion resets the fasting mode to "None" in the same
    snapshot, so an illegal religion/fasting pairing is never observable.
    Setting the religion to its current value returns the profile unchanged.
    Health issues are replaced as a whole, not merged.
    """
    name = _FIELD_NAMES.get(field)
    if name is None:
        raise InvalidProfile(f"Unknown profile field '{field}'", field=field)

    if name == "religion":
        try:
            religion = Religion(value)
        except ValueError:
            raise InvalidProfile(f"Unknown religion '{value}'", field=name)
        if religion == profile.religion:
            return profile
        return _rebuild(profile, {"religion": religion, "fasting_mode": NO_FAST})

    if name == "fasting_mode":
        if not isinstance(value, str) or not is_valid_fasting_mode(profile.religion, value):
            allowed = ", ".join(fasting_options_for(profile.religion))
            raise InvalidProfile(
                f"Fasting mode '{value}' is not available for religion "
                f"'{profile.religion.value}'. Choose one of: {allowed}",
                field=name,
            )

    return _rebuild(profile, {name: value})


def profile_from_storage(stored: Optional[dict], reset_fasting: bool = False) -> Optional[Profile]:
    """
    Rebuild a profile from its stored record.

    Stored values are merged over the defaults and a missing anchor date
    becomes today. With reset_fasting the fasting mode starts back at "None",
    which is how a new session begins. Returns None when nothing usable was
    stored.
    """
    if not stored:
        return None
    if not isinstance(stored, dict):
        print(f"⚠️ Ignoring stored profile of type {type(stored).__name__}")
        return None

    data = dict(stored)
    data["healthIssues"] = data.get("healthIssues") or []
    data["currentDate"] = data.get("currentDate") or date.today()
    if reset_fasting:
        data["fastingMode"] = NO_FAST
        data.pop("fasting_mode", None)

    try:
        return Profile.model_validate(data)
    except ValidationError as e:
        print(f"⚠️ Failed to load stored profile: {e.error_count()} invalid field(s)")
        return None


def profile_to_storage(profile: Profile) -> dict:
    return profile.model_dump(mode="json", by_alias=True)
