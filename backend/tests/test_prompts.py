"""Tests for the weekly menu prompt and preference form options."""

from dinner_menu.schemas.menu import MenuPreferences, PriceRange, Restriction, TimeToMake
from dinner_menu.services.menu.prompts import build_menu_prompt, describe_restrictions, menu_options


def test_default_prompt():
    prompt = build_menu_prompt(MenuPreferences())
    assert "Generate a 7-day dinner menu (Monday to Sunday)" in prompt
    assert "approximately 30 minutes or less to prepare" in prompt
    assert "average-priced ingredients. Use common grocery store ingredients." in prompt
    assert "MUST be 100% no dietary restrictions." in prompt
    assert '{"day": "Monday", "meal_name": "Grilled Chicken Salad"' in prompt
    assert prompt.endswith("Return only valid JSON.")


def test_budget_quick_prompt():
    prefs = MenuPreferences(time_to_make=TimeToMake.FIFTEEN, price_range=PriceRange.BUDGET)
    prompt = build_menu_prompt(prefs)
    assert "approximately 15 minutes or less to prepare" in prompt
    assert "budget-friendly, inexpensive ingredients. Avoid expensive proteins" in prompt


def test_gourmet_slow_prompt():
    prefs = MenuPreferences(time_to_make="45", price_range="gourmet")
    prompt = build_menu_prompt(prefs)
    assert "approximately 45-60 minutes to prepare" in prompt
    assert "Include high-quality proteins and specialty ingredients." in prompt


def test_restrictions_are_spelled_out():
    prefs = MenuPreferences(restrictions=["gluten-free", "shellfish-allergy"])
    assert "MUST be 100% gluten free, shellfish allergy." in build_menu_prompt(prefs)
    assert describe_restrictions([]) == "no dietary restrictions"


def test_toggle_restriction():
    prefs = MenuPreferences()
    prefs = prefs.toggle_restriction("vegetarian")
    prefs = prefs.toggle_restriction(Restriction.DAIRY_FREE)
    assert prefs.restrictions == [Restriction.VEGETARIAN, Restriction.DAIRY_FREE]
    prefs = prefs.toggle_restriction("vegetarian")
    assert prefs.restrictions == [Restriction.DAIRY_FREE]


def test_duplicate_restrictions_collapse():
    prefs = MenuPreferences(restrictions=["vegetarian", "vegetarian"])
    assert prefs.restrictions == [Restriction.VEGETARIAN]


def test_menu_options_labels():
    options = menu_options()
    assert options["timeToMake"][2] == {"value": "45", "label": "45-60 Mins", "icon": "🕐🕐"}
    assert options["priceRange"][0]["symbol"] == "$"
    assert {"value": "nut-allergy", "label": "Nut-Allergy"} in options["restrictions"]
