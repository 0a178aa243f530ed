from dataclasses import dataclass
from enum import Enum

from google.genai import types

from app.core.errors import InvalidProfile
from app.core.policy import ConstraintFragment, compose_constraints
from app.core.prompts import diet_plan_intro, diet_plan_task, store_lookup_task
from app.models.schemas import Profile
from app.tools.response_schemas import schema_diet_plan, schema_store_list


class RequestKind(str, Enum):
    DIET_PLAN = "diet-plan"
    STORE_LOOKUP = "store-lookup"


RESPONSE_SCHEMAS = {
    RequestKind.DIET_PLAN: schema_diet_plan,
    RequestKind.STORE_LOOKUP: schema_store_list,
}


@dataclass(frozen=True)
class GenerationRequest:
    kind: RequestKind
    prompt: str
    response_schema: types.Schema


def render_diet_plan_prompt(fragment: ConstraintFragment) -> str:
    return "\n\n".join([diet_plan_intro, fragment.text(), diet_plan_task])


def build_diet_plan_request(profile: Profile) -> GenerationRequest:
    """Build the 7-day plan request for a profile. Same profile, same request."""
    fragment = compose_constraints(profile)
    return GenerationRequest(
        kind=RequestKind.DIET_PLAN,
        prompt=render_diet_plan_prompt(fragment),
        response_schema=RESPONSE_SCHEMAS[RequestKind.DIET_PLAN],
    )


def build_store_request(city: str) -> GenerationRequest:
    city = (city or "").strip()
    if not city:
        raise InvalidProfile("A city is required to look up grocery stores", field="city")
    return GenerationRequest(
        kind=RequestKind.STORE_LOOKUP,
        prompt=store_lookup_task.format(city=city),
        response_schema=RESPONSE_SCHEMAS[RequestKind.STORE_LOOKUP],
    )
