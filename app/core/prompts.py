diet_plan_intro = """You are an expert Indian nutritionist. Create a customized 7-day diet plan based on the following user details:"""

diet_plan_task = """Generate a complete 7-day plan. For each day, provide a breakfast, lunch, and dinner meal.
The diet plan MUST be suitable for the specified health issues and religious constraints.
For each meal, include the dish name, a list of ingredients with quantities, simple step-by-step instructions, and the estimated calorie count.
Also, provide the total estimated calories for each day.
The plan should be healthy, balanced, and suitable for the user's profile."""

store_lookup_task = """Find a list of 3-5 popular BigBasket stores in {city}. Provide their name, a valid URL, timings, address, a current offer, and ratings."""
