"""
Recipe Capture - Language tables.

Every bilingual vocabulary the heuristics use lives here as data.
Adding a language means adding a Lexicon entry, not new branches.
"""

import re
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Lexicon:
    """Keyword and pattern tables for one language."""

    code: str
    placeholder_title: str
    units: tuple[str, ...]
    ingredient_keywords: tuple[str, ...]
    action_verbs: tuple[str, ...]
    imperative_patterns: tuple[re.Pattern, ...]
    step_keywords: tuple[str, ...]

    @property
    def unit_pattern(self) -> re.Pattern:
        return _unit_pattern(self.units)


@lru_cache
def _unit_pattern(units: tuple[str, ...]) -> re.Pattern:
    alternation = "|".join(re.escape(unit) for unit in units)
    return re.compile(rf"\b({alternation})\b", re.IGNORECASE)


GERMAN = Lexicon(
    code="de",
    placeholder_title="OCR-Rezept",
    units=(
        "g", "kg", "mg",
        "ml", "l", "dl", "cl",
        "EL", "TL", "Tasse", "Tassen",
        "Prise", "Prisen",
        "Stück", "Stk",
        "Bund", "Zehe", "Zehen",
        "cm", "mm",
    ),
    ingredient_keywords=(
        "Mehl", "Zucker", "Salz", "Pfeffer", "Butter", "Öl", "Olivenöl",
        "Ei", "Eier", "Milch", "Sahne", "Käse",
        "Zwiebel", "Zwiebeln", "Knoblauch",
        "Tomate", "Tomaten", "Gurke", "Gurken",
        "Fleisch", "Hühnchen", "Rindfleisch", "Schweinefleisch",
        "Fisch", "Lachs", "Thunfisch",
        "Wasser", "Brühe",
        "frisch", "gehackt", "gewürfelt", "gerieben",
    ),
    action_verbs=(
        "mischen", "rühren", "schlagen", "verrühren", "vermengen",
        "schneiden", "hacken", "würfeln", "raspeln", "reiben",
        "kochen", "braten", "backen", "grillen", "dünsten", "garen",
        "erhitzen", "aufkochen", "köcheln",
        "hinzufügen", "hinzugeben", "dazugeben", "unterrühren",
        "abschmecken", "würzen", "salzen", "pfeffern",
        "servieren", "anrichten", "garnieren",
        "vorheizen", "vorbereiten", "waschen", "schälen",
        "gießen", "abgießen", "abtropfen",
        "ziehen lassen", "ruhen lassen", "marinieren",
    ),
    imperative_patterns=(
        re.compile(r"^(den|die|das|einen|eine|ein)\s+\w+", re.IGNORECASE),  # "Den Ofen vorheizen"
        re.compile(r"\s+(und|dann|anschließend|danach)\s+", re.IGNORECASE),
        re.compile(r"\s+(bei|für|ca\.|etwa)\s+\d+", re.IGNORECASE),  # "bei 180°C", "für 30 Minuten"
    ),
    step_keywords=(
        "Schritt", "Schüssel", "Pfanne", "Topf", "Ofen", "Backblech",
        "Minuten", "Stunden", "Grad", "°C",
        "bis", "bis zu", "ca.", "etwa", "circa",
        "goldbraun", "gar", "weich", "fest",
        "vorsichtig", "langsam", "schnell",
        "gleichmäßig", "kräftig", "gut",
    ),
)

ENGLISH = Lexicon(
    code="en",
    placeholder_title="OCR Recipe",
    units=(
        "g", "kg", "mg", "oz", "lb", "lbs",
        "ml", "l", "cup", "cups",
        "tbsp", "tsp", "tablespoon", "tablespoons", "teaspoon", "teaspoons",
        "pinch", "pinches",
        "piece", "pieces", "pcs",
        "bunch", "clove", "cloves",
        "inch", "inches", "cm", "mm",
    ),
    ingredient_keywords=(
        "flour", "sugar", "salt", "pepper", "butter", "oil", "olive oil",
        "egg", "eggs", "milk", "cream", "cheese",
        "onion", "onions", "garlic",
        "tomato", "tomatoes", "cucumber", "cucumbers",
        "meat", "chicken", "beef", "pork",
        "fish", "salmon", "tuna",
        "water", "broth", "stock",
        "fresh", "chopped", "diced", "grated", "minced",
    ),
    action_verbs=(
        "mix", "stir", "beat", "whisk", "combine", "blend",
        "cut", "chop", "dice", "mince", "slice", "grate", "shred",
        "cook", "fry", "bake", "grill", "roast", "simmer", "boil",
        "heat", "preheat", "warm",
        "add", "pour", "sprinkle", "fold in",
        "season", "salt", "pepper", "taste",
        "serve", "garnish", "plate",
        "prepare", "wash", "peel", "clean",
        "drain", "strain",
        "let rest", "let stand", "marinate", "chill", "cool",
    ),
    imperative_patterns=(
        re.compile(r"^(preheat|mix|add|combine|beat|whisk|stir|cut|chop|place|put|set)", re.IGNORECASE),
        re.compile(r"\s+(then|next|after|until|for|at)\s+", re.IGNORECASE),
        re.compile(r"\s+(for|at|about)\s+\d+", re.IGNORECASE),  # "for 30 minutes", "at 180°C"
    ),
    step_keywords=(
        "step", "bowl", "pan", "pot", "oven", "baking sheet", "sheet",
        "minutes", "hours", "degrees", "°F", "°C",
        "until", "about", "approximately",
        "golden", "brown", "done", "soft", "firm", "tender",
        "gently", "slowly", "quickly", "carefully",
        "evenly", "well", "thoroughly",
    ),
)

LEXICONS: dict[str, Lexicon] = {
    GERMAN.code: GERMAN,
    ENGLISH.code: ENGLISH,
}

DEFAULT_LANGUAGE = GERMAN.code

# Placeholder titles of every language (the validator treats them as "no title")
PLACEHOLDER_TITLES = frozenset(lexicon.placeholder_title for lexicon in LEXICONS.values())

# Section headings (bilingual, shared)
INGREDIENT_SECTION_KEYWORDS = ("zutaten", "ingredients")
STEP_SECTION_KEYWORDS = (
    "zubereitung",
    "anleitung",
    "schritte",
    "steps",
    "directions",
    "instructions",
    "preparation",
    "method",
)

# Notion exports also carry Italian/French ingredient headings
NOTION_INGREDIENT_KEYWORDS = ("zutaten", "ingredients", "ingredienti", "ingrédients")
NOTION_STEP_KEYWORDS = (
    "zubereitung",
    "anleitung",
    "schritte",
    "steps",
    "directions",
    "instructions",
    "preparation",
)

# Dietary tag token -> cuisine label
DIETARY_TAGS: dict[str, str] = {
    "vegetarisch": "Vegetarisch",
    "vegetarian": "Vegetarisch",
    "vegan": "Vegan",
    "glutenfrei": "Glutenfrei",
    "gluten-free": "Glutenfrei",
    "laktosefrei": "Laktosefrei",
    "lactose-free": "Laktosefrei",
}


def get_lexicon(lang: str | None) -> Lexicon:
    """Get the tables for a language, falling back to German."""
    return LEXICONS.get(lang or DEFAULT_LANGUAGE, GERMAN)
