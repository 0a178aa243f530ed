from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.policy import compose_constraints
from app.models.profile_logic import FASTING_OPTIONS_BY_RELIGION
from app.models.schemas import Budget, Cuisine, FoodType, HealthIssue, MealTiming, Profile, Sex
from app.services.request_builder import build_diet_plan_request

router = APIRouter(
    prefix="/public",
    tags=["public"]
)


@router.get("/options", response_class=JSONResponse)
def get_profile_options():
    """Legal values for every enumerated profile field."""
    return {
        "sex": [item.value for item in Sex],
        "healthIssues": [item.value for item in HealthIssue],
        "cuisine": [item.value for item in Cuisine],
        "foodType": [item.value for item in FoodType],
        "budget": [item.value for item in Budget],
        "mealTiming": [item.value for item in MealTiming],
        "religion": [religion.value for religion in FASTING_OPTIONS_BY_RELIGION],
        "fastingOptions": {
            religion.value: options for religion, options in FASTING_OPTIONS_BY_RELIGION.items()
        },
    }


@router.post("/preview-request", response_class=JSONResponse)
def preview_diet_plan_request(profile: Profile):
    """
    Show the clauses and the prompt a profile would produce, without calling
    the model.
    """
    fragment = compose_constraints(profile)
    request = build_diet_plan_request(profile)
    return {
        "kind": request.kind.value,
        "clauses": [
            {"source": clause.source.value, "text": clause.text} for clause in fragment.clauses
        ],
        "prompt": request.prompt,
    }
