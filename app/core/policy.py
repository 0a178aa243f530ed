"""
Translates a profile into the ordered list of constraint clauses that the
diet-plan prompt is built from.

Clause order is fixed:

    1. profile block          (always)
    2. fasting rule           (fasting mode set)
    3. religious fasting rule (fasting mode set and religion set)
    4. religious note         (no fast, Muslim or Jain only)
    5. festival rule          (festival mode on)

Rules 3 and 4 never appear together. Everything here is pure: the same
profile always yields the same clauses.
"""
from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict

from app.models.profile_logic import is_valid_fasting_mode
from app.models.schemas import NO_FAST, Profile, Religion


class ClauseSource(str, Enum):
    PROFILE = "profile"
    FASTING_RULE = "fasting-rule"
    RELIGION_RULE = "religion-rule"
    RELIGION_NOTE = "religion-note"
    FESTIVAL_RULE = "festival-rule"


class Clause(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: ClauseSource
    text: str


class ConstraintFragment(BaseModel):
    model_config = ConfigDict(frozen=True)

    parameters: dict[str, str] = {}
    clauses: tuple[Clause, ...] = ()

    @property
    def sources(self) -> list[ClauseSource]:
        return [clause.source for clause in self.clauses]

    def text(self) -> str:
        return "\n".join(clause.text for clause in self.clauses)


RAMADAN = "Ramadan"


# --- Religious fasting rules (rule 3) ---

def _hindu_fast_rules(fasting_mode: str) -> list[str]:
    return [
        "- For Hindu fasts like Ekadashi or Navratri: Avoid grains and pulses (rice, wheat, lentils, beans).",
        "- Also avoid onion, garlic, meat, eggs, and alcohol.",
        "- Focus on fruits, dairy, rock salt (sendha namak), and specific non-grain flours like water "
        "chestnut flour (singhare ka atta) or buckwheat flour (kuttu ka atta).",
    ]


def _muslim_fast_rules(fasting_mode: str) -> list[str]:
    rules = [
        "- All meals MUST be Halal. This means no pork, no alcohol, and only halal-slaughtered meat.",
    ]
    if fasting_mode == RAMADAN:
        rules += [
            "- For Ramadan, the plan should have a 'Suhoor' (pre-dawn meal) and 'Iftar' (post-sunset meal).",
            "- Suhoor meals should be hydrating and provide sustained energy. Avoid very oily or spicy foods.",
            "- Iftar should start with something light like dates and water, followed by a balanced meal.",
        ]
    return rules


def _christian_fast_rules(fasting_mode: str) -> list[str]:
    return [
        "- For Christian fasts like Lent (especially on Fridays, Ash Wednesday, Good Friday): "
        "Abstain from meat (from warm-blooded animals).",
        "- Fish is typically allowed. Dairy and eggs are generally allowed.",
    ]


def _jain_fast_rules(fasting_mode: str) -> list[str]:
    return [
        "- The diet must be strictly lacto-vegetarian.",
        "- Absolutely NO root/underground vegetables (potato, onion, garlic, carrots, radish, beets, etc.).",
        "- Avoid mushrooms, fungi, and honey.",
        "- Suggest meals that can be consumed before sunset. During special fasts like Paryushana, "
        "the food should be even simpler.",
    ]


RELIGIOUS_FAST_RULES: dict[Religion, Callable[[str], list[str]]] = {
    Religion.HINDU: _hindu_fast_rules,
    Religion.MUSLIM: _muslim_fast_rules,
    Religion.CHRISTIAN: _christian_fast_rules,
    Religion.JAIN: _jain_fast_rules,
}


# --- Standing religious notes without a fast (rule 4) ---

RELIGIOUS_NOTES: dict[Religion, str] = {
    Religion.MUSLIM: (
        "- Note: As the user is Muslim, ensure all non-vegetarian dishes use Halal meat and avoid "
        "pork and alcohol entirely in all recipes."
    ),
    Religion.JAIN: (
        "- Note: As the user is Jain, the diet must be strictly lacto-vegetarian and MUST NOT contain "
        "any root vegetables (potato, onion, garlic, etc.) or mushrooms in any recipes."
    ),
}


def profile_parameters(profile: Profile) -> dict[str, str]:
    """Plain values for the base profile block, in prompt order."""
    health_issues = ", ".join(issue.value for issue in profile.health_issues) or "None"
    return {
        "Age": f"{profile.age} years",
        "Sex": profile.sex.value,
        "Weight": f"{profile.weight:g} kg",
        "Height": f"{profile.height:g} cm",
        "Health Issues": health_issues,
        "Religion": profile.religion.value,
        "Food Allergies or restrictions": profile.allergies.strip() or "None",
        "Preferred Cuisine": profile.cuisine.value,
        "Food Type": profile.food_type.value,
        "Daily Budget": f"{profile.budget.value} INR",
        "Location (City)": profile.city.strip(),
        "Meal Timing Preference": profile.meal_timing.value,
    }


def effective_fasting_mode(profile: Profile) -> str:
    """The profile's fasting mode, or "None" if it is not legal for the religion."""
    if is_valid_fasting_mode(profile.religion, profile.fasting_mode):
        return profile.fasting_mode
    print(
        f"⚠️ Fasting mode '{profile.fasting_mode}' is not valid for religion "
        f"'{profile.religion.value}'; treating it as '{NO_FAST}'"
    )
    return NO_FAST


def profile_clause(parameters: dict[str, str]) -> Clause:
    lines = [f"- {label}: {value}" for label, value in parameters.items()]
    return Clause(source=ClauseSource.PROFILE, text="\n".join(lines))


def fasting_clause(fasting_mode: str) -> Clause:
    return Clause(
        source=ClauseSource.FASTING_RULE,
        text=f"- Fasting Mode: The user is observing {fasting_mode}. Create a plan that respects this fast, "
        "including appropriate nutrient-rich meals for feasting and fasting periods.",
    )


def religious_fast_clause(religion: Religion, fasting_mode: str) -> Clause:
    rules = RELIGIOUS_FAST_RULES[religion](fasting_mode)
    lines = [
        "--- IMPORTANT: RELIGIOUS DIETARY & FASTING RULES ---",
        f"The user is observing a fast as per their {religion.value} faith. You MUST adhere to the "
        "following specific rules for the recipes on fasting days:",
        *rules,
        "------------------------------------------------------",
    ]
    return Clause(source=ClauseSource.RELIGION_RULE, text="\n".join(lines))


def religious_note_clause(religion: Religion) -> Clause:
    return Clause(source=ClauseSource.RELIGION_NOTE, text=RELIGIOUS_NOTES[religion])


def festival_clause(profile: Profile) -> Clause:
    lines = [
        f"- Festival Mode is ON. The current date is {profile.current_date.isoformat()}.",
        "  - Check if any major Indian festivals (like Diwali, Eid, Navratri, Pongal, Onam) are occurring "
        "in the next 7 days in the user's region.",
        "  - If a festival is detected, adjust the meal plan for that day to include special festive dishes "
        "that are healthier than the traditional versions (e.g., baked snacks, low-fat sweets, millet-based "
        "dishes). Add a \"theme\" to that day's plan (e.g., \"Diwali Special\").",
        "  - After the festival day(s), include exactly one 'Post-Festival Detox' day with lighter, "
        "restorative meals. Add the theme \"Detox Day\" to this day.",
    ]
    return Clause(source=ClauseSource.FESTIVAL_RULE, text="\n".join(lines))


def compose_constraints(profile: Profile) -> ConstraintFragment:
    parameters = profile_parameters(profile)
    clauses = [profile_clause(parameters)]

    fasting_mode = effective_fasting_mode(profile)
    religion = profile.religion

    if fasting_mode != NO_FAST:
        clauses.append(fasting_clause(fasting_mode))
        if religion in RELIGIOUS_FAST_RULES:
            clauses.append(religious_fast_clause(religion, fasting_mode))
    elif religion in RELIGIOUS_NOTES:
        clauses.append(religious_note_clause(religion))

    if profile.enable_festival_mode:
        clauses.append(festival_clause(profile))

    return ConstraintFragment(parameters=parameters, clauses=tuple(clauses))
