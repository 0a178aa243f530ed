from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class Sex(str, Enum):
    FEMALE = "Female"
    MALE = "Male"
    OTHER = "Other"


class HealthIssue(str, Enum):
    DIABETES = "Diabetes"
    HIGH_BLOOD_PRESSURE = "High Blood Pressure"
    PCOS = "PCOS"
    THYROID = "Thyroid"
    HIGH_CHOLESTEROL = "High Cholesterol"


class Cuisine(str, Enum):
    NORTH_INDIAN = "North Indian"
    SOUTH_INDIAN = "South Indian"
    EAST_INDIAN = "East Indian"
    WEST_INDIAN = "West Indian"
    ANY = "Any"


class FoodType(str, Enum):
    VEG = "Veg"
    NON_VEG = "Non-Veg"
    EGGETARIAN = "Eggetarian"


class Budget(str, Enum):
    LOW = "100-400"
    MEDIUM = "400-600"
    HIGH = "600+"


class MealTiming(str, Enum):
    STANDARD = "Standard"
    EARLY_BREAKFAST = "Early Breakfast"
    LATE_DINNER = "Late Dinner"


class Religion(str, Enum):
    NONE = "None"
    HINDU = "Hindu"
    MUSLIM = "Muslim"
    CHRISTIAN = "Christian"
    JAIN = "Jain"


NO_FAST = "None"


class Profile(BaseModel):
    """
    Immutable snapshot of everything the planner knows about the user.
    Serialized with camelCase keys (healthIssues, fastingMode, ...).
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    age: int = Field(gt=0)
    sex: Sex = Sex.FEMALE
    weight: float = Field(gt=0)  # kg
    height: float = Field(gt=0)  # cm
    allergies: str = ""
    health_issues: tuple[HealthIssue, ...] = ()
    cuisine: Cuisine = Cuisine.NORTH_INDIAN
    food_type: FoodType = FoodType.VEG
    budget: Budget = Budget.MEDIUM  # INR per day
    city: str = ""
    current_date: date = Field(default_factory=date.today)
    enable_festival_mode: bool = False
    meal_timing: MealTiming = MealTiming.STANDARD
    religion: Religion = Religion.NONE
    fasting_mode: str = NO_FAST

    @field_validator("health_issues", mode="after")
    @classmethod
    def normalize_health_issues(cls, value):
        # Order-irrelevant set: dedupe and keep declaration order
        return tuple(issue for issue in HealthIssue if issue in value)


class Meal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dish_name: str = Field(alias="dishName", min_length=1)
    calories: float = Field(ge=0)
    ingredients: list[str]
    instructions: str


class DayMeals(BaseModel):
    breakfast: Meal
    lunch: Meal
    dinner: Meal


class DayPlan(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: str
    theme: Optional[str] = None  # e.g. "Diwali Special", "Detox Day"
    meals: DayMeals
    total_calories: float = Field(alias="totalCalories")


class Store(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    url: str = Field(alias="URL")
    timing: str = Field(alias="Timing")
    address: str = Field(alias="Address")
    offer: str = Field(alias="Offer")
    ratings: str = Field(alias="Ratings")


DietPlan = list[DayPlan]
StoreList = list[Store]


# --- Request / response bodies ---

class ProfileFieldUpdate(BaseModel):
    field: str  # camelCase or snake_case field name
    value: Any


class StoreLookupRequest(BaseModel):
    city: Optional[str] = None  # falls back to the saved profile's city


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    name: str


class Token(BaseModel):
    access_token: str
    token_type: str
