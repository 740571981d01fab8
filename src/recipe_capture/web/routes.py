"""API endpoints for recipe capture (OCR text, CSV, Notion, JSON)."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from recipe_capture.config import settings
from recipe_capture.exceptions import CsvImportError, RecipeInputError
from recipe_capture.recipe_import import (
    RecipeDraft,
    ValidationReport,
    get_validation_summary,
    import_from_json,
    is_acceptable,
    parse_delimited_recipes,
    parse_single_notion_document,
    parse_smart,
    validate_recipe,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipe-capture"])


# =============================================================================
# Request/Response Models
# =============================================================================


class ParseTextRequest(BaseModel):
    """OCR text to parse."""

    text: str
    lang: str | None = None  # Defaults to the configured language


class ParseTextResponse(BaseModel):
    """Parsed recipe with its quality report."""

    recipe: RecipeDraft
    validation: ValidationReport
    summary: str
    acceptable: bool


class CsvImportRequest(BaseModel):
    """CSV file content as text."""

    content: str
    author: str = ""  # Used for rows without "Erstellt von"


class CsvImportResponse(BaseModel):
    recipes: list[RecipeDraft]
    count: int


class DocumentRequest(BaseModel):
    """Notion Markdown/CSV export or JSON text."""

    content: str


class RecipeResponse(BaseModel):
    recipe: RecipeDraft


class ValidateRequest(BaseModel):
    recipe: dict[str, Any]
    lang: str = "de"


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/recipes/parse-text", response_model=ParseTextResponse)
async def parse_text(req: ParseTextRequest) -> ParseTextResponse:
    """
    Parse OCR text into a recipe draft for review.

    Falls back to line classification when the text has no section headings.
    """
    lang = req.lang or settings.default_language
    try:
        result = parse_smart(req.text, lang)
    except RecipeInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Parsed OCR text: '{result.recipe.title}' (score {result.validation.score})")
    return ParseTextResponse(
        recipe=result.recipe,
        validation=result.validation,
        summary=get_validation_summary(result.validation, lang),
        acceptable=is_acceptable(result.validation, settings.min_acceptable_score),
    )


@router.post("/recipes/import-csv", response_model=CsvImportResponse)
async def import_csv(req: CsvImportRequest, request: Request) -> CsvImportResponse:
    """
    Bulk import recipes from CSV.

    Rows that fail are skipped; if every row fails, returns 422 with the
    collected row errors.
    """
    library = getattr(request.app.state, "category_images", None)
    lookup = library.lookup if library is not None else None

    try:
        recipes = await parse_delimited_recipes(req.content, req.author, get_category_image=lookup)
    except RecipeInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CsvImportError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})

    logger.info(f"CSV import: {len(recipes)} recipes")
    return CsvImportResponse(recipes=recipes, count=len(recipes))


@router.post("/recipes/import-notion", response_model=RecipeResponse)
async def import_notion(req: DocumentRequest) -> RecipeResponse:
    """Import a single recipe from a Notion Markdown or CSV export."""
    try:
        recipe = parse_single_notion_document(req.content)
    except RecipeInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RecipeResponse(recipe=recipe)


@router.post("/recipes/import-json", response_model=RecipeResponse)
async def import_json(req: DocumentRequest) -> RecipeResponse:
    """Import a single recipe from JSON text."""
    try:
        recipe = import_from_json(req.content)
    except RecipeInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RecipeResponse(recipe=recipe)


@router.post("/recipes/validate", response_model=ValidationReport)
async def validate(req: ValidateRequest) -> ValidationReport:
    """Re-validate a recipe after the user edited it."""
    try:
        return validate_recipe(req.recipe, req.lang)
    except RecipeInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
