from dinner_menu.schemas.menu import MenuPreferences, PriceRange, Restriction, TimeToMake

WEEKLY_MENU_PROMPT_NAME = "weekly_menu"
WEEKLY_MENU_PROMPT_VERSION = "v1"

TIME_OPTIONS = {
    TimeToMake.FIFTEEN: {"label": "15 Mins", "icon": "⚡", "description": "15 minutes or less"},
    TimeToMake.THIRTY: {"label": "30 Mins", "icon": "🕐", "description": "30 minutes or less"},
    TimeToMake.FORTY_FIVE_TO_SIXTY: {"label": "45-60 Mins", "icon": "🕐🕐", "description": "45-60 minutes"},
}

PRICE_OPTIONS = {
    PriceRange.BUDGET: {
        "label": "Budget",
        "symbol": "$",
        "description": "budget-friendly, inexpensive ingredients",
        "guidance": "Avoid expensive proteins and exotic ingredients.",
    },
    PriceRange.AVERAGE: {
        "label": "Average",
        "symbol": "$$",
        "description": "average-priced ingredients",
        "guidance": "Use common grocery store ingredients.",
    },
    PriceRange.GOURMET: {
        "label": "Gourmet",
        "symbol": "$$$",
        "description": "gourmet, premium ingredients",
        "guidance": "Include high-quality proteins and specialty ingredients.",
    },
}

RESTRICTION_LABELS = {
    Restriction.GLUTEN_FREE: "Gluten-Free",
    Restriction.DAIRY_FREE: "Dairy-Free",
    Restriction.VEGETARIAN: "Vegetarian",
    Restriction.NUT_ALLERGY: "Nut-Allergy",
    Restriction.SHELLFISH_ALLERGY: "Shellfish-Allergy",
}

NO_RESTRICTIONS = "no dietary restrictions"

WEEKLY_MENU_TEMPLATE = """You are a professional nutritionist and meal planner. Generate a 7-day dinner menu (Monday to Sunday).

You MUST follow these constraints:
- Preparation Time: All meals must take approximately {time_desc} to prepare.
- Cost: All meals must use {price_desc}. {price_guidance}
- Dietary Restrictions: All meals MUST be 100% {restrictions_desc}.

Output Format: Respond ONLY with a valid JSON array. Each object must have exactly these three keys:
- "day": The day of the week (e.g., "Monday")
- "meal_name": The name of the meal
- "simple_description": A brief one-sentence description

Example format:
[
  {{"day": "Monday", "meal_name": "Grilled Chicken Salad", "simple_description": "A fresh salad with grilled chicken breast, mixed greens, and vinaigrette."}},
  {{"day": "Tuesday", "meal_name": "Beef Tacos", "simple_description": "Soft corn tortillas filled with seasoned ground beef and toppings."}}
]

Do not include any text before or after the JSON array. Return only valid JSON."""


def describe_restrictions(restrictions: list[Restriction]) -> str:
    if not restrictions:
        return NO_RESTRICTIONS
    return ", ".join(Restriction(r).value.replace("-", " ") for r in restrictions)


def build_menu_prompt(preferences: MenuPreferences) -> str:
    """Turn the form selection into the instruction sent to the model."""
    price = PRICE_OPTIONS[preferences.price_range]
    return WEEKLY_MENU_TEMPLATE.format(
        time_desc=TIME_OPTIONS[preferences.time_to_make]["description"],
        price_desc=price["description"],
        price_guidance=price["guidance"],
        restrictions_desc=describe_restrictions(preferences.restrictions),
    )


def menu_options() -> dict:
    """Selectable values for the preference form, in display order."""
    defaults = MenuPreferences()
    return {
        "timeToMake": [
            {"value": key.value, "label": opt["label"], "icon": opt["icon"]}
            for key, opt in TIME_OPTIONS.items()
        ],
        "priceRange": [
            {"value": key.value, "label": opt["label"], "symbol": opt["symbol"]}
            for key, opt in PRICE_OPTIONS.items()
        ],
        "restrictions": [
            {"value": key.value, "label": label} for key, label in RESTRICTION_LABELS.items()
        ],
        "defaults": {
            "timeToMake": defaults.time_to_make.value,
            "priceRange": defaults.price_range.value,
            "restrictions": [r.value for r in defaults.restrictions],
        },
    }
