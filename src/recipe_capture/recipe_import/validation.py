"""
Recipe validation - how well did a scan get recognized?

Checks which recipe components were detected (title, cuisine, servings,
cooking time, ingredients, steps), assigns a confidence per field and a
weighted overall score (0-100), and collects warnings and suggestions for
the user. Messages are German by default, English on request.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from recipe_capture.exceptions import RecipeInputError

from .lexicon import PLACEHOLDER_TITLES
from .models import DEFAULT_COOKING_TIME, DEFAULT_SERVINGS, RecipeDraft, ValidationReport

FIELD_WEIGHTS: dict[str, int] = {
    "title": 20,
    "cuisine": 10,
    "servings": 10,
    "cooking_time": 10,
    "ingredients": 25,
    "steps": 25,
}

MESSAGES: dict[str, dict[str, str]] = {
    "de": {
        "no_title": "Kein Rezepttitel gefunden",
        "title_visible": "Stellen Sie sicher, dass der Rezepttitel am Anfang des Bildes sichtbar ist",
        "title_add": "Fügen Sie einen Rezepttitel am Anfang hinzu",
        "no_cuisine": "Kulinarik nicht erkannt",
        "cuisine_add": 'Fügen Sie eine Zeile hinzu wie "Kulinarik: Italienisch" oder "Cuisine: Italian"',
        "odd_servings": "Ungewöhnliche Portionenanzahl: {value}",
        "no_servings": "Portionenanzahl nicht erkannt (Standard: 4 verwendet)",
        "servings_add": 'Fügen Sie eine Zeile hinzu wie "Portionen: 4" oder "für 4 Personen"',
        "odd_cooking_time": "Ungewöhnliche Kochdauer: {value} Minuten",
        "no_cooking_time": "Zubereitungsdauer nicht erkannt (Standard: 30 Minuten verwendet)",
        "cooking_time_add": 'Fügen Sie eine Zeile hinzu wie "Kochdauer: 45" oder "Zeit: 45 Minuten"',
        "single_ingredient": "Nur eine Zutat erkannt - ist das korrekt?",
        "many_ingredients": "Sehr viele Zutaten erkannt ({count}) - prüfen Sie auf Duplikate",
        "no_ingredients": "Keine Zutaten erkannt",
        "ingredients_visible": 'Stellen Sie sicher, dass der Abschnitt "Zutaten" oder "Ingredients" sichtbar ist',
        "many_steps": "Sehr viele Zubereitungsschritte erkannt ({count}) - prüfen Sie auf korrekte Zusammenführung",
        "no_steps": "Keine Zubereitungsschritte erkannt",
        "steps_visible": 'Stellen Sie sicher, dass der Abschnitt "Zubereitung" oder "Instructions" sichtbar ist',
        "low_quality": (
            "Die Erkennungsqualität ist niedrig. Versuchen Sie, das Bild erneut zu scannen "
            "mit besserer Beleuchtung und höherer Auflösung."
        ),
        "moderate_quality": "Die Erkennungsqualität ist mittelmäßig. Einige Informationen fehlen oder sind unvollständig.",
    },
    "en": {
        "no_title": "No recipe title found",
        "title_visible": "Make sure the recipe title is visible at the top of the image",
        "title_add": "Add a recipe title at the beginning",
        "no_cuisine": "Cuisine not detected",
        "cuisine_add": 'Add a line such as "Cuisine: Italian" or "Kulinarik: Italienisch"',
        "odd_servings": "Unusual number of servings: {value}",
        "no_servings": "Servings not detected (default of 4 used)",
        "servings_add": 'Add a line such as "Servings: 4" or "for 4 people"',
        "odd_cooking_time": "Unusual cooking time: {value} minutes",
        "no_cooking_time": "Cooking time not detected (default of 30 minutes used)",
        "cooking_time_add": 'Add a line such as "Cooking time: 45" or "Time: 45 minutes"',
        "single_ingredient": "Only one ingredient detected - is that correct?",
        "many_ingredients": "Very many ingredients detected ({count}) - check for duplicates",
        "no_ingredients": "No ingredients detected",
        "ingredients_visible": 'Make sure the "Ingredients" or "Zutaten" section is visible',
        "many_steps": "Very many preparation steps detected ({count}) - check that lines were merged correctly",
        "no_steps": "No preparation steps detected",
        "steps_visible": 'Make sure the "Instructions" or "Zubereitung" section is visible',
        "low_quality": "Recognition quality is low. Try scanning the image again with better lighting and a higher resolution.",
        "moderate_quality": "Recognition quality is moderate. Some information is missing or incomplete.",
    },
}

SUMMARY_LABELS: dict[str, dict[str, str]] = {
    "de": {
        "detected": "Erkannt",
        "not_detected": "Nicht erkannt",
        "quality": "Erkennungsqualität",
        "excellent": "Ausgezeichnet",
        "good": "Gut",
        "moderate": "Mittelmäßig",
        "poor": "Schlecht",
        "title": "Rezepttitel",
        "cuisine": "Kulinarik",
        "servings": "Portionen",
        "cooking_time": "Zubereitungsdauer",
        "ingredients": "Zutaten",
        "steps": "Zubereitungsschritte",
    },
    "en": {
        "detected": "Detected",
        "not_detected": "Not detected",
        "quality": "Recognition Quality",
        "excellent": "Excellent",
        "good": "Good",
        "moderate": "Moderate",
        "poor": "Poor",
        "title": "Recipe Title",
        "cuisine": "Cuisine",
        "servings": "Servings",
        "cooking_time": "Cooking Time",
        "ingredients": "Ingredients",
        "steps": "Preparation Steps",
    },
}


def _coerce_draft(recipe: Any) -> RecipeDraft:
    if isinstance(recipe, RecipeDraft):
        return recipe

    if isinstance(recipe, Mapping):
        # Blank form fields arrive as null and fall back to the defaults
        fields = {key: value for key, value in recipe.items() if value is not None}
        try:
            return RecipeDraft.model_validate({"title": "", **fields})
        except ValidationError as e:
            raise RecipeInputError(f"Ungültiges Rezeptobjekt für Validierung: {e}") from e

    raise RecipeInputError("Ungültiges Rezeptobjekt für Validierung")


def validate_recipe(recipe: RecipeDraft | Mapping[str, Any], lang: str = "de") -> ValidationReport:
    """
    Validate a parsed recipe.

    Args:
        recipe: RecipeDraft (or a mapping of its fields)
        lang: Message language ("de" or "en")

    Returns:
        ValidationReport with per-field detection, confidence and the
        weighted overall score

    Raises:
        RecipeInputError: If recipe is neither a draft nor a mapping
    """
    draft = _coerce_draft(recipe)
    msg = MESSAGES.get(lang, MESSAGES["de"])

    detected = {name: False for name in FIELD_WEIGHTS}
    confidence = {name: 0 for name in FIELD_WEIGHTS}
    warnings: list[str] = []
    suggestions: list[str] = []
    is_valid = True

    # Title
    title = draft.title.strip()
    if title and title not in PLACEHOLDER_TITLES:
        detected["title"] = True
        confidence["title"] = min(100, 50 + len(draft.title) * 2)
    elif title:
        warnings.append(msg["no_title"])
        suggestions.append(msg["title_visible"])
    else:
        warnings.append(msg["no_title"])
        suggestions.append(msg["title_add"])

    # Cuisine
    if any(cuisine.strip() for cuisine in draft.cuisines):
        detected["cuisine"] = True
        confidence["cuisine"] = 90
    else:
        warnings.append(msg["no_cuisine"])
        suggestions.append(msg["cuisine_add"])

    # Servings (4 is the parser default, so only other values count as detected)
    if draft.servings and draft.servings != DEFAULT_SERVINGS:
        detected["servings"] = True
        if 1 <= draft.servings <= 50:
            confidence["servings"] = 95
        else:
            confidence["servings"] = 60
            warnings.append(msg["odd_servings"].format(value=draft.servings))
    else:
        warnings.append(msg["no_servings"])
        suggestions.append(msg["servings_add"])

    # Cooking time (30 is the parser default)
    if draft.cooking_time_minutes and draft.cooking_time_minutes != DEFAULT_COOKING_TIME:
        detected["cooking_time"] = True
        if 1 <= draft.cooking_time_minutes <= 600:
            confidence["cooking_time"] = 95
        else:
            confidence["cooking_time"] = 60
            warnings.append(msg["odd_cooking_time"].format(value=draft.cooking_time_minutes))
    else:
        warnings.append(msg["no_cooking_time"])
        suggestions.append(msg["cooking_time_add"])

    # Ingredients
    count = len(draft.ingredient_texts)
    if count:
        detected["ingredients"] = True
        if count == 1:
            confidence["ingredients"] = 50
            warnings.append(msg["single_ingredient"])
        elif count <= 30:
            confidence["ingredients"] = min(100, 70 + count * 2)
        else:
            confidence["ingredients"] = 70
            warnings.append(msg["many_ingredients"].format(count=count))
    else:
        is_valid = False
        warnings.append(msg["no_ingredients"])
        suggestions.append(msg["ingredients_visible"])

    # Steps
    count = len(draft.step_texts)
    if count:
        detected["steps"] = True
        if count <= 20:
            confidence["steps"] = min(100, 70 + count * 3)
        else:
            confidence["steps"] = 70
            warnings.append(msg["many_steps"].format(count=count))
    else:
        is_valid = False
        warnings.append(msg["no_steps"])
        suggestions.append(msg["steps_visible"])

    # Weights sum to 100, so the weighted sum / 100 is already the percentage
    weighted = sum(FIELD_WEIGHTS[name] * confidence[name] for name in FIELD_WEIGHTS if detected[name])
    score = (weighted + 50) // 100

    if score < 50:
        suggestions.insert(0, msg["low_quality"])
    elif score < 70:
        suggestions.insert(0, msg["moderate_quality"])

    return ValidationReport(
        is_valid=is_valid,
        detected=detected,
        confidence=confidence,
        warnings=warnings,
        suggestions=suggestions,
        score=score,
    )


def _quality_label(score: int, labels: dict[str, str]) -> str:
    if score >= 85:
        return labels["excellent"]
    if score >= 70:
        return labels["good"]
    if score >= 50:
        return labels["moderate"]
    return labels["poor"]


def get_validation_summary(report: ValidationReport | None, lang: str = "de") -> str:
    """Render a human-readable quality summary with ✓/✗ lines per field."""
    if report is None:
        return ""

    labels = SUMMARY_LABELS.get(lang, SUMMARY_LABELS["de"])
    summary = f"{labels['quality']}: {report.score}% ({_quality_label(report.score, labels)})\n\n"

    detected_items = [f"✓ {labels.get(name, name)}" for name, found in report.detected.items() if found]
    missing_items = [f"✗ {labels.get(name, name)}" for name, found in report.detected.items() if not found]

    if detected_items:
        summary += f"{labels['detected']}:\n" + "\n".join(detected_items) + "\n\n"
    if missing_items:
        summary += f"{labels['not_detected']}:\n" + "\n".join(missing_items) + "\n"

    return summary


def is_acceptable(report: ValidationReport | None, min_score: int = 40) -> bool:
    """Ingredients and steps must be detected and the score must reach min_score."""
    if report is None:
        return False
    if not report.detected.get("ingredients") or not report.detected.get("steps"):
        return False
    return report.score >= min_score
