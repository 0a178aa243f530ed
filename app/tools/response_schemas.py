from google.genai import types

DIET_PLAN_DAYS = 7
MIN_STORES = 3
MAX_STORES = 5

MEAL_SLOTS = ["breakfast", "lunch", "dinner"]
STORE_FIELDS = ["Name", "URL", "Timing", "Address", "Offer", "Ratings"]


schema_meal = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "dishName": types.Schema(type=types.Type.STRING),
        "calories": types.Schema(type=types.Type.NUMBER, minimum=0),
        "ingredients": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="List of ingredients with quantities (e.g., '1 cup rice', '200g chicken').",
        ),
        "instructions": types.Schema(
            type=types.Type.STRING,
            description="Step-by-step recipe instructions.",
        ),
    },
    required=["dishName", "calories", "ingredients", "instructions"],
)

schema_diet_plan = types.Schema(
    type=types.Type.ARRAY,
    min_items=DIET_PLAN_DAYS,
    max_items=DIET_PLAN_DAYS,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "day": types.Schema(type=types.Type.STRING, description="Day of the week (e.g., Monday)"),
            "theme": types.Schema(
                type=types.Type.STRING,
                description="A special theme for the day, like 'Diwali Special' or 'Detox Day'.",
            ),
            "meals": types.Schema(
                type=types.Type.OBJECT,
                properties={slot: schema_meal for slot in MEAL_SLOTS},
                required=MEAL_SLOTS,
            ),
            "totalCalories": types.Schema(
                type=types.Type.NUMBER,
                minimum=0,
                description="Total calories for the day.",
            ),
        },
        required=["day", "meals", "totalCalories"],
    ),
)

schema_store_list = types.Schema(
    type=types.Type.ARRAY,
    min_items=MIN_STORES,
    max_items=MAX_STORES,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={name: types.Schema(type=types.Type.STRING) for name in STORE_FIELDS},
        required=STORE_FIELDS,
    ),
)
