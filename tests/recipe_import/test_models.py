"""
Tests for the recipe draft models.
"""

import pytest
from pydantic import ValidationError

from recipe_capture.recipe_import.models import DraftBuilder, ItemKind, ListItem, RecipeDraft


class TestListItem:
    """Tests for ListItem.from_raw."""

    def test_heading_without_space(self):
        item = ListItem.from_raw("###Teig")
        assert item.kind == ItemKind.HEADING
        assert item.text == "Teig"

    def test_heading_is_trimmed(self):
        item = ListItem.from_raw("  ### Belag ")
        assert item == ListItem(kind=ItemKind.HEADING, text="Belag")

    def test_plain_value_keeps_kind(self):
        assert ListItem.from_raw(" 300g Mehl ") == ListItem(kind=ItemKind.INGREDIENT, text="300g Mehl")
        assert ListItem.from_raw("Kneten", ItemKind.STEP).kind == ItemKind.STEP

    def test_blank_is_none(self):
        assert ListItem.from_raw("   ") is None
        assert ListItem.from_raw(None) is None


class TestRecipeDraft:
    """Tests for RecipeDraft."""

    def test_defaults(self):
        recipe = RecipeDraft(title="Suppe")
        assert recipe.servings == 4
        assert recipe.servings_unit == "portion"
        assert recipe.cooking_time_minutes == 30
        assert recipe.difficulty == 3
        assert recipe.ingredients == ()
        assert recipe.is_private is False

    def test_difficulty_is_clamped(self):
        assert RecipeDraft(title="A", difficulty=0).difficulty == 1
        assert RecipeDraft(title="A", difficulty=9).difficulty == 5
        assert RecipeDraft(title="A", difficulty="").difficulty == 3

    def test_plain_strings_become_items(self):
        recipe = RecipeDraft(title="Pizza", ingredients=["###Teig", "300g Mehl", ""], steps=["Kneten"])
        assert recipe.ingredients == (
            ListItem(kind=ItemKind.HEADING, text="Teig"),
            ListItem(kind=ItemKind.INGREDIENT, text="300g Mehl"),
        )
        assert recipe.steps == (ListItem(kind=ItemKind.STEP, text="Kneten"),)

    def test_texts_skip_headings(self):
        recipe = RecipeDraft(title="Pizza", ingredients=["###Teig", "300g Mehl", "###Belag", "Tomaten"])
        assert recipe.ingredient_texts == ["300g Mehl", "Tomaten"]
        assert recipe.step_texts == []

    def test_frozen(self):
        recipe = RecipeDraft(title="Suppe")
        with pytest.raises(ValidationError):
            recipe.title = "Eintopf"

    def test_json_round_trip_keeps_headings(self):
        recipe = RecipeDraft(title="Pizza", ingredients=["###Teig", "300g Mehl"])
        restored = RecipeDraft.model_validate_json(recipe.model_dump_json())
        assert restored == recipe
        assert restored.ingredients[0].kind == ItemKind.HEADING


class TestDraftBuilder:
    """Tests for DraftBuilder."""

    def test_add_item_routes_by_target(self):
        builder = DraftBuilder()
        builder.add_item(ItemKind.INGREDIENT, "200g Mehl")
        builder.add_item(ItemKind.STEP, "###Vorbereitung")
        builder.add_item(ItemKind.STEP, "Mehl sieben")

        assert [item.text for item in builder.ingredients] == ["200g Mehl"]
        assert [item.kind for item in builder.steps] == [ItemKind.HEADING, ItemKind.STEP]

    def test_add_item_skips_blank(self):
        builder = DraftBuilder()
        assert builder.add_item(ItemKind.INGREDIENT, "  ") is None
        assert builder.ingredients == []

    def test_add_cuisine_is_case_insensitive(self):
        builder = DraftBuilder()
        assert builder.add_cuisine("Vegan") is True
        assert builder.add_cuisine("vegan") is False
        assert builder.cuisines == ["Vegan"]

    def test_build_uses_fallback_title(self):
        assert DraftBuilder().build(fallback_title="OCR-Rezept").title == "OCR-Rezept"
        assert DraftBuilder(title="Suppe").build(fallback_title="OCR-Rezept").title == "Suppe"

    def test_build_freezes_lists(self):
        builder = DraftBuilder(title="Salat", cuisines=["Griechisch"])
        recipe = builder.build()
        builder.cuisines.append("Vegan")
        assert recipe.cuisines == ("Griechisch",)
