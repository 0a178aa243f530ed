from datetime import date

import pytest

from app.core.errors import InvalidProfile
from app.models.profile_logic import (
    FASTING_OPTIONS_BY_RELIGION,
    fasting_options_for,
    normalize_fasting,
    profile_from_storage,
    profile_to_storage,
    update_profile_field,
)
from app.models.schemas import HealthIssue, Profile, Religion


@pytest.mark.parametrize("religion", ["Hindu", "Muslim", "Christian", "Jain", "None"])
def test_changing_religion_resets_fasting_mode(profile, religion):
    fasting = update_profile_field(profile, "religion", "Muslim")
    fasting = update_profile_field(fasting, "fastingMode", "Ramadan")

    updated = update_profile_field(fasting, "religion", religion)

    if religion == "Muslim":
        assert updated == fasting
        assert updated.fasting_mode == "Ramadan"
    else:
        assert updated.religion == Religion(religion)
        assert updated.fasting_mode == "None"


def test_setting_same_religion_is_a_no_op(profile):
    hindu = update_profile_field(profile, "religion", "Hindu")
    fasting = update_profile_field(hindu, "fasting_mode", "Navratri")

    assert update_profile_field(fasting, "religion", "Hindu") is fasting


def test_fasting_mode_must_belong_to_religion(profile):
    hindu = update_profile_field(profile, "religion", "Hindu")

    with pytest.raises(InvalidProfile) as exc:
        update_profile_field(hindu, "fastingMode", "Ramadan")

    assert exc.value.field == "fasting_mode"


def test_fasting_mode_none_religion_only_allows_none(profile):
    assert fasting_options_for(Religion.NONE) == ["None"]
    with pytest.raises(InvalidProfile):
        update_profile_field(profile, "fastingMode", "Lent")


def test_every_religion_offers_no_fast_first():
    for religion in Religion:
        assert FASTING_OPTIONS_BY_RELIGION[religion][0] == "None"


def test_health_issues_are_replaced_not_merged(profile):
    updated = update_profile_field(profile, "healthIssues", ["PCOS", "Thyroid"])

    assert updated.health_issues == (HealthIssue.PCOS, HealthIssue.THYROID)
    assert HealthIssue.DIABETES not in updated.health_issues


def test_health_issue_order_does_not_matter(profile):
    first = update_profile_field(profile, "healthIssues", ["Thyroid", "Diabetes"])
    second = update_profile_field(profile, "healthIssues", ["Diabetes", "Thyroid", "Diabetes"])

    assert first == second


def test_setter_leaves_original_untouched(profile):
    update_profile_field(profile, "city", "Pune")

    assert profile.city == "Bengaluru"


def test_unknown_field_is_rejected(profile):
    with pytest.raises(InvalidProfile):
        update_profile_field(profile, "favouriteColour", "blue")


def test_out_of_domain_value_is_rejected(profile):
    with pytest.raises(InvalidProfile) as exc:
        update_profile_field(profile, "budget", "1000+")
    assert exc.value.field == "budget"

    with pytest.raises(InvalidProfile):
        update_profile_field(profile, "weight", 0)

    with pytest.raises(InvalidProfile):
        update_profile_field(profile, "religion", "Pastafarian")


def test_profile_round_trips_through_storage(profile):
    stored = profile_to_storage(profile)

    assert stored["healthIssues"] == ["Diabetes"]
    assert stored["currentDate"] == "2025-10-18"
    assert profile_from_storage(stored) == profile


def test_loading_for_new_session_resets_fasting(profile):
    muslim = update_profile_field(profile, "religion", "Muslim")
    fasting = update_profile_field(muslim, "fastingMode", "Ramadan")
    stored = profile_to_storage(fasting)

    assert profile_from_storage(stored).fasting_mode == "Ramadan"
    assert profile_from_storage(stored, reset_fasting=True).fasting_mode == "None"


def test_loading_fills_defaults():
    loaded = profile_from_storage({"age": 40, "weight": 80, "height": 175, "city": "Delhi"})

    assert loaded.health_issues == ()
    assert loaded.current_date == date.today()
    assert loaded.cuisine.value == "North Indian"
    assert loaded.food_type.value == "Veg"
    assert loaded.budget.value == "400-600"


def test_loading_nothing_or_garbage_returns_none():
    assert profile_from_storage(None) is None
    assert profile_from_storage({}) is None
    assert profile_from_storage(["not", "a", "profile"]) is None
    assert profile_from_storage({"age": -1, "weight": 80, "height": 175}) is None


def test_profile_accepts_camel_case_keys():
    loaded = Profile.model_validate({
        "age": 25,
        "weight": 55,
        "height": 150,
        "foodType": "Eggetarian",
        "enableFestivalMode": True,
        "mealTiming": "Late Dinner",
    })

    assert loaded.food_type.value == "Eggetarian"
    assert loaded.enable_festival_mode is True
    assert loaded.meal_timing.value == "Late Dinner"


def test_normalize_fasting_resets_fast_of_another_religion(profile):
    broken = profile.model_copy(update={"religion": Religion.HINDU, "fasting_mode": "Ramadan"})

    fixed = normalize_fasting(broken)

    assert fixed.religion == Religion.HINDU
    assert fixed.fasting_mode == "None"


def test_normalize_fasting_keeps_legal_fast(profile):
    fasting = profile.model_copy(update={"religion": Religion.JAIN, "fasting_mode": "Ayambil"})

    assert normalize_fasting(fasting) is fasting
