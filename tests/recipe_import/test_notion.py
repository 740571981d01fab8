"""
Tests for the Notion Markdown and CSV export parsers.
"""

import pytest

from recipe_capture.exceptions import RecipeInputError
from recipe_capture.recipe_import.models import ItemKind
from recipe_capture.recipe_import.notion import (
    looks_like_csv,
    parse_notion_csv,
    parse_notion_markdown,
    parse_single_notion_document,
)


class TestParseNotionMarkdown:
    """Tests for parse_notion_markdown."""

    def test_example_page(self, notion_markdown):
        recipe = parse_notion_markdown(notion_markdown)

        assert recipe.title == "Pizza Bianco al Tartufo"
        assert recipe.servings == 4
        assert recipe.cuisines == ("Italienisch",)
        assert recipe.difficulty == 3
        assert recipe.cooking_time_minutes == 45
        assert recipe.category == "Hauptgericht"
        assert len(recipe.ingredient_texts) == 6
        assert recipe.ingredient_texts[-1] == "Salz, Pfeffer"
        assert recipe.step_texts[0] == "Ofen auf 250°C vorheizen"
        assert recipe.step_texts[4] == "10-12 Minuten backen"
        assert len(recipe.step_texts) == 6

    def test_sub_headings(self):
        markdown = "# Kuchen\n## Zutaten\n### Teig\n- 200g Mehl\n## Zubereitung\n- 1. Teig rühren"
        recipe = parse_notion_markdown(markdown)

        assert recipe.ingredients[0].kind == ItemKind.HEADING
        assert recipe.ingredients[0].text == "Teig"
        assert recipe.ingredient_texts == ["200g Mehl"]
        assert recipe.step_texts == ["Teig rühren"]

    def test_sub_heading_can_switch_section(self):
        markdown = "# Salat\n### Zutaten\n* Gurke\n### Zubereitung\n* Schneiden"
        recipe = parse_notion_markdown(markdown)

        assert recipe.ingredient_texts == ["Gurke"]
        assert recipe.step_texts == ["Schneiden"]

    def test_property_table(self):
        markdown = (
            "# Suppe\n| Eigenschaft | Wert |\n|---|---|\n| Portionen | 6 |\n| Kochdauer | 20 Minuten |\n"
            "## Zutaten\n- 1 l Wasser"
        )
        recipe = parse_notion_markdown(markdown)

        assert recipe.servings == 6
        assert recipe.cooking_time_minutes == 20
        assert recipe.ingredient_texts == ["1 l Wasser"]

    def test_column_table(self):
        markdown = "# Salat\n| Portionen | Kulinarik |\n| --- | --- |\n| 2 | Griechisch |"
        recipe = parse_notion_markdown(markdown)

        assert recipe.servings == 2
        assert recipe.cuisines == ("Griechisch",)

    def test_image_property(self):
        markdown = "# Salat\n**Bild:** ![Foto](https://example.com/salat.jpg)"
        assert parse_notion_markdown(markdown).image_ref == "https://example.com/salat.jpg"

    def test_missing_title_stays_empty(self):
        assert parse_notion_markdown("## Zutaten\n- Salz").title == ""

    @pytest.mark.parametrize("markdown", ["", None])
    def test_invalid_input(self, markdown):
        with pytest.raises(RecipeInputError, match="Ungültiger Markdown-Inhalt"):
            parse_notion_markdown(markdown)


class TestParseNotionCsv:
    """Tests for parse_notion_csv."""

    def test_first_row(self):
        content = "Name,Portionen,Kulinarik,Schwierigkeit\nRisotto,4,Italienisch,2\nPaella,6,Spanisch,3"
        recipe = parse_notion_csv(content)

        assert recipe.title == "Risotto"
        assert recipe.servings == 4
        assert recipe.cuisines == ("Italienisch",)
        assert recipe.difficulty == 2

    def test_quoted_values(self):
        recipe = parse_notion_csv('Rezept,Kulinarik\nRisotto,"Italienisch, Klassisch"')
        assert recipe.cuisines == ("Italienisch", "Klassisch")

    def test_header_only(self):
        with pytest.raises(RecipeInputError):
            parse_notion_csv("Name,Portionen")


class TestParseSingleNotionDocument:
    """Tests for format detection."""

    def test_markdown(self, notion_markdown):
        assert parse_single_notion_document(notion_markdown).title == "Pizza Bianco al Tartufo"

    def test_csv(self):
        assert parse_single_notion_document("Name,Portionen\nRisotto,4").title == "Risotto"

    def test_looks_like_csv(self):
        assert looks_like_csv("\n\nName,Portionen\nRisotto,4")
        assert not looks_like_csv("# Titel, mit Komma")
        assert not looks_like_csv("| a, b |")
        assert not looks_like_csv("Nur Text")

    @pytest.mark.parametrize("content", ["", "   ", None])
    def test_invalid_input(self, content):
        with pytest.raises(RecipeInputError, match="Ungültiger Notion-Inhalt"):
            parse_single_notion_document(content)
