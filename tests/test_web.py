"""
Tests for the FastAPI endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from recipe_capture import __version__
from recipe_capture.recipe_import import CategoryImageLibrary
from recipe_capture.web import create_app


@pytest.fixture
def client():
    return TestClient(create_app())


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}


class TestParseText:
    """Tests for POST /api/recipes/parse-text."""

    def test_parse(self, client, carbonara_text):
        response = client.post("/api/recipes/parse-text", json={"text": carbonara_text, "lang": "de"})

        assert response.status_code == 200
        body = response.json()
        assert body["recipe"]["title"] == "Spaghetti Carbonara"
        assert body["validation"]["score"] == 55
        assert body["summary"].startswith("Erkennungsqualität: 55%")
        assert body["acceptable"] is True

    def test_blank_text(self, client):
        response = client.post("/api/recipes/parse-text", json={"text": "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Ungültiger OCR-Text"


class TestImportCsv:
    """Tests for POST /api/recipes/import-csv."""

    def test_import(self, client, example_csv):
        response = client.post("/api/recipes/import-csv", json={"content": example_csv, "author": "Anna"})

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert body["recipes"][0]["author_name"] == "Max Mustermann"
        assert body["recipes"][0]["is_private"] is True

    def test_category_images(self, example_csv):
        library = CategoryImageLibrary()
        library.add("img://main", ["Hauptgericht"])
        client = TestClient(create_app(category_images=library))

        response = client.post("/api/recipes/import-csv", json={"content": example_csv})

        assert [recipe["image_ref"] for recipe in response.json()["recipes"]] == ["img://main", "img://main"]

    def test_all_rows_fail(self, client):
        response = client.post(
            "/api/recipes/import-csv",
            json={"content": "Name,Zutat1,Zubereitungsschritt1\n,Mehl,Backen"},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == ["Zeile 2: Rezeptname fehlt"]

    def test_no_data_row(self, client):
        response = client.post("/api/recipes/import-csv", json={"content": "Name,Zutat1"})
        assert response.status_code == 400


class TestDocumentImports:
    """Tests for the Notion and JSON endpoints."""

    def test_notion(self, client, notion_markdown):
        response = client.post("/api/recipes/import-notion", json={"content": notion_markdown})

        assert response.status_code == 200
        assert response.json()["recipe"]["title"] == "Pizza Bianco al Tartufo"

    def test_json(self, client):
        content = '{"titel": "Toast", "zutaten": ["Brot"], "zubereitung": ["Toasten"]}'
        response = client.post("/api/recipes/import-json", json={"content": content})

        assert response.status_code == 200
        assert response.json()["recipe"]["steps"] == [{"kind": "step", "text": "Toasten"}]

    def test_invalid_json(self, client):
        response = client.post("/api/recipes/import-json", json={"content": "{kaputt"})
        assert response.status_code == 400


class TestValidate:
    """Tests for POST /api/recipes/validate."""

    def test_validate(self, client):
        recipe = {"title": "Toast", "ingredients": ["Brot"], "steps": ["Toasten"]}
        response = client.post("/api/recipes/validate", json={"recipe": recipe, "lang": "en"})

        assert response.status_code == 200
        body = response.json()
        assert body["detected"]["ingredients"] is True
        assert "Only one ingredient detected - is that correct?" in body["warnings"]

    def test_invalid_recipe(self, client):
        response = client.post("/api/recipes/validate", json={"recipe": {"servings": "viele"}})
        assert response.status_code == 400

    def test_null_fields(self, client):
        recipe = {"title": None, "servings": None, "ingredients": ["Brot"], "steps": ["Toasten"]}
        response = client.post("/api/recipes/validate", json={"recipe": recipe})

        assert response.status_code == 200
        assert "Kein Rezepttitel gefunden" in response.json()["warnings"]
