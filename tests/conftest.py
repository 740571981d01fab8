"""
Pytest configuration and fixtures for Recipe Capture tests.
"""

import os

import pytest

# Set test environment before importing recipe_capture modules
os.environ["RECIPE_CAPTURE_ENVIRONMENT"] = "development"
os.environ["RECIPE_CAPTURE_DEFAULT_LANGUAGE"] = "de"


@pytest.fixture
def carbonara_text():
    """Minimal German OCR transcript with both sections."""
    return (
        "Spaghetti Carbonara\n\nPortionen: 4\n\nZutaten\n\n400g Spaghetti\n200g Pancetta"
        "\n\nZubereitung\n\n1. Nudeln kochen\n2. Pancetta braten"
    )


@pytest.fixture
def english_ocr_text():
    """English OCR transcript with fractions and numbered steps."""
    return """Chocolate Chip Cookies

Servings: 24
Time: 25

Ingredients

2 cups flour
1 tsp baking soda
1/2 tsp salt
1 cup butter
3/4 cup sugar
2 eggs
2 cups chocolate chips

Instructions

1. Preheat oven to 375°F
2. Mix flour, baking soda and salt
3. Beat butter and sugar until fluffy
4. Add eggs and mix well
5. Stir in flour mixture
6. Fold in chocolate chips
7. Drop spoonfuls onto baking sheet
8. Bake for 10-12 minutes"""


@pytest.fixture
def example_csv():
    """Two-recipe bulk export in the German column layout."""
    return (
        "Name,Erstellt am,Erstellt von,Kulinarik,Speisenkategorie,Portionen,Zubereitung,Schwierigkeit,"
        "Zutat1,Zutat2,Zutat3,Zubereitungsschritt1,Zubereitungsschritt2\n"
        'Spaghetti Carbonara,2024-01-15,Max Mustermann,"Italienisch,Klassisch",Hauptgericht,4 Portionen,30,3,'
        "400g Spaghetti,200g Speck,4 Eier,Nudeln kochen,Sauce zubereiten und servieren\n"
        'Pizza Margherita,2024-01-16,Anna Müller,Italienisch,"Hauptgericht,Vegetarisch",2 Portionen,25,2,'
        "###Teig,300g Mehl,###Belag,200g Tomaten,Teig zubereiten,Belegen und backen"
    )


@pytest.fixture
def notion_markdown():
    """Notion page export with bold properties and numbered steps."""
    return """# Pizza Bianco al Tartufo

**Portionen:** 4
**Kulinarik:** Italienisch
**Schwierigkeit:** 3
**Kochdauer:** 45 Minuten
**Speisekategorie:** Hauptgericht

## Zutaten

- 500g Pizzateig
- 200g Mozzarella
- 100g Ricotta
- 50g Parmesan
- 2 EL Trüffelöl
- Salz, Pfeffer

## Zubereitung

1. Ofen auf 250°C vorheizen
2. Pizzateig ausrollen
3. Mozzarella, Ricotta und Parmesan verteilen
4. Mit Salz und Pfeffer würzen
5. 10-12 Minuten backen
6. Mit Trüffelöl beträufeln und servieren
"""
