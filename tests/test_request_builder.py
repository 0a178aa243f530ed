import pytest
from google.genai import types

from app.core.errors import InvalidProfile
from app.models.schemas import Religion
from app.services.request_builder import RequestKind, build_diet_plan_request, build_store_request
from app.tools.response_schemas import schema_diet_plan, schema_store_list


def test_diet_plan_request_is_pure(profile):
    twin = profile.model_validate(profile.model_dump(mode="json", by_alias=True))

    first = build_diet_plan_request(profile)
    second = build_diet_plan_request(twin)

    assert first.prompt == second.prompt
    assert first.prompt.encode() == second.prompt.encode()
    assert first.response_schema == second.response_schema
    assert first == second


def test_diet_plan_request_does_not_mutate_profile(profile):
    before = profile.model_dump()
    build_diet_plan_request(profile)
    assert profile.model_dump() == before


def test_diet_plan_prompt_layout(profile):
    festive = profile.model_copy(update={
        "religion": Religion.HINDU,
        "fasting_mode": "Navratri",
        "enable_festival_mode": True,
    })

    prompt = build_diet_plan_request(festive).prompt

    assert prompt.startswith("You are an expert Indian nutritionist.")
    assert prompt.rstrip().endswith("suitable for the user's profile.")
    assert prompt.index("- Age:") < prompt.index("Fasting Mode:") < prompt.index(
        "RELIGIOUS DIETARY & FASTING RULES") < prompt.index("Festival Mode is ON")
    assert "Generate a complete 7-day plan" in prompt


def test_diet_plan_shape(profile):
    request = build_diet_plan_request(profile)

    assert request.kind == RequestKind.DIET_PLAN
    assert request.response_schema is schema_diet_plan
    schema = request.response_schema
    assert schema.type == types.Type.ARRAY
    assert schema.min_items == 7 and schema.max_items == 7
    day = schema.items
    assert day.required == ["day", "meals", "totalCalories"]
    assert "theme" in day.properties
    meals = day.properties["meals"]
    assert meals.required == ["breakfast", "lunch", "dinner"]
    assert meals.properties["lunch"].required == ["dishName", "calories", "ingredients", "instructions"]


def test_store_request():
    request = build_store_request("  Pune ")

    assert request.kind == RequestKind.STORE_LOOKUP
    assert request.response_schema is schema_store_list
    assert request.prompt == (
        "Find a list of 3-5 popular BigBasket stores in Pune. Provide their name, a valid URL, "
        "timings, address, a current offer, and ratings."
    )
    assert request.response_schema.items.required == ["Name", "URL", "Timing", "Address", "Offer", "Ratings"]
    assert build_store_request("Pune") == request


@pytest.mark.parametrize("city", ["", "   ", None])
def test_store_request_needs_a_city(city):
    with pytest.raises(InvalidProfile):
        build_store_request(city)
