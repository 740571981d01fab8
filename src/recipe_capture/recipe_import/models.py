"""Data models for recipe import."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .normalizer import parse_difficulty

Language = Literal["de", "en"]

DEFAULT_SERVINGS = 4
DEFAULT_COOKING_TIME = 30
DEFAULT_DIFFICULTY = 3
DEFAULT_SERVINGS_UNIT = "portion"


class ItemKind(str, Enum):
    """Kind of an entry in an ingredient or step list."""

    HEADING = "heading"
    INGREDIENT = "ingredient"
    STEP = "step"


class LineType(str, Enum):
    """Result of classifying a single line of text."""

    INGREDIENT = "ingredient"
    STEP = "step"
    UNKNOWN = "unknown"


class ListItem(BaseModel):
    """
    One entry of an ingredient or step list.

    A heading applies to every following item until the next heading.
    """

    model_config = ConfigDict(frozen=True)

    kind: ItemKind
    text: str

    @classmethod
    def from_raw(cls, value: str | None, kind: ItemKind = ItemKind.INGREDIENT) -> "ListItem | None":
        """
        Build an item from a raw field value.

        Values starting with "###" become headings (prefix stripped, trimmed).
        Blank values return None.

        Examples:
            "###Teig" -> heading "Teig"
            " 300g Mehl " -> ingredient "300g Mehl"
        """
        if not value or not value.strip():
            return None

        trimmed = value.strip()
        if trimmed.startswith("###"):
            return cls(kind=ItemKind.HEADING, text=trimmed[3:].strip())

        return cls(kind=kind, text=trimmed)


def _coerce_items(value: Any, kind: ItemKind) -> Any:
    """Accept plain strings alongside ListItem/dict entries."""
    if value is None:
        return ()
    if isinstance(value, (str, bytes)):
        return value  # let pydantic reject it

    items = []
    for entry in value:
        if isinstance(entry, str):
            item = ListItem.from_raw(entry, kind)
            if item:
                items.append(item)
        else:
            items.append(entry)
    return tuple(items)


class RecipeDraft(BaseModel):
    """
    Structured recipe produced by every parser.

    Immutable once returned; use model_copy(update=...) for edits.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    servings: int = DEFAULT_SERVINGS
    servings_unit: str = DEFAULT_SERVINGS_UNIT
    cooking_time_minutes: int = DEFAULT_COOKING_TIME
    difficulty: int = DEFAULT_DIFFICULTY
    cuisines: tuple[str, ...] = ()
    category: str = ""
    categories: tuple[str, ...] = ()
    ingredients: tuple[ListItem, ...] = ()
    steps: tuple[ListItem, ...] = ()
    notes: str = ""
    image_ref: str = ""
    author_name: str = ""
    created_at_raw: str = ""  # CSV "Erstellt am", kept unparsed
    is_private: bool = False

    @field_validator("difficulty", mode="before")
    @classmethod
    def _clamp_difficulty(cls, value: Any) -> int:
        return parse_difficulty(value)

    @field_validator("ingredients", mode="before")
    @classmethod
    def _coerce_ingredients(cls, value: Any) -> Any:
        return _coerce_items(value, ItemKind.INGREDIENT)

    @field_validator("steps", mode="before")
    @classmethod
    def _coerce_steps(cls, value: Any) -> Any:
        return _coerce_items(value, ItemKind.STEP)

    @property
    def ingredient_texts(self) -> list[str]:
        return [item.text for item in self.ingredients if item.kind != ItemKind.HEADING]

    @property
    def step_texts(self) -> list[str]:
        return [item.text for item in self.steps if item.kind != ItemKind.HEADING]


@dataclass
class DraftBuilder:
    """
    Mutable accumulator used while a single parse runs.

    Lists are append-only; build() freezes the result into a RecipeDraft.
    """

    title: str = ""
    servings: int = DEFAULT_SERVINGS
    servings_unit: str = DEFAULT_SERVINGS_UNIT
    cooking_time_minutes: int = DEFAULT_COOKING_TIME
    difficulty: int = DEFAULT_DIFFICULTY
    cuisines: list[str] = field(default_factory=list)
    category: str = ""
    categories: list[str] = field(default_factory=list)
    ingredients: list[ListItem] = field(default_factory=list)
    steps: list[ListItem] = field(default_factory=list)
    notes: str = ""
    image_ref: str = ""
    author_name: str = ""
    created_at_raw: str = ""
    is_private: bool = False

    def add_item(self, target: ItemKind, value: str) -> ListItem | None:
        """Append a raw value to the ingredient or step list (honours "###" headings)."""
        item = ListItem.from_raw(value, target)
        if item is None:
            return None
        if target == ItemKind.STEP:
            self.steps.append(item)
        else:
            self.ingredients.append(item)
        return item

    def add_cuisine(self, name: str) -> bool:
        """Add a cuisine unless it is already present (case-insensitive)."""
        if any(existing.lower() == name.lower() for existing in self.cuisines):
            return False
        self.cuisines.append(name)
        return True

    def build(self, fallback_title: str = "") -> RecipeDraft:
        return RecipeDraft(
            title=self.title or fallback_title,
            servings=self.servings,
            servings_unit=self.servings_unit,
            cooking_time_minutes=self.cooking_time_minutes,
            difficulty=self.difficulty,
            cuisines=tuple(self.cuisines),
            category=self.category,
            categories=tuple(self.categories),
            ingredients=tuple(self.ingredients),
            steps=tuple(self.steps),
            notes=self.notes,
            image_ref=self.image_ref,
            author_name=self.author_name,
            created_at_raw=self.created_at_raw,
            is_private=self.is_private,
        )


@dataclass(frozen=True)
class Classification:
    """Transient per-line classifier verdict."""

    kind: LineType
    confidence: int  # 0-100


@dataclass
class ClassifiedText:
    """Lines sorted into buckets by the classifier."""

    ingredients: list[str] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)
    unclassified: list[str] = field(default_factory=list)


class ValidationReport(BaseModel):
    """Quality report derived from a RecipeDraft. Never stored on the draft."""

    is_valid: bool = True
    detected: dict[str, bool] = Field(default_factory=dict)
    confidence: dict[str, int] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    score: int = 0  # 0-100


@dataclass
class SmartParseResult:
    """Parsed recipe together with its validation report."""

    recipe: RecipeDraft
    validation: ValidationReport
