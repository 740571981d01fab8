"""
Custom exception classes for recipe capture.

Heuristic misses (unknown lines, unrecognized properties, unconvertible
fractions) are not errors and never raise.
"""


class RecipeCaptureError(Exception):
    """Base exception for recipe capture"""
    pass


class RecipeInputError(RecipeCaptureError, ValueError):
    """Raised when input cannot be processed at all (wrong type, empty, too short)"""
    pass


class CsvRowError(RecipeCaptureError):
    """Raised when a single CSV row does not form a valid recipe"""
    def __init__(self, row_number: int, message: str, title: str | None = None):
        self.row_number = row_number
        self.reason = message
        self.title = title
        if title:
            super().__init__(f"Zeile {row_number} ({title}): {message}")
        else:
            super().__init__(f"Zeile {row_number}: {message}")


class CsvImportError(RecipeCaptureError):
    """Raised when no row of a CSV import produced a valid recipe"""
    def __init__(self, errors: list[str]):
        self.errors = errors
        if errors:
            message = "Fehler beim Importieren:\n" + "\n".join(errors)
        else:
            message = "Keine gültigen Rezepte zum Importieren gefunden"
        super().__init__(message)


class OcrError(RecipeCaptureError):
    """Raised when the OCR engine fails to recognize an image"""
    def __init__(self, original_error: str):
        self.original_error = original_error
        super().__init__(f"OCR recognition failed: {original_error}")
