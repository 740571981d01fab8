"""
Category images - default pictures for recipes without their own image.

Each image can be linked to several meal categories; each category belongs
to at most one image. CategoryImageLibrary.lookup() plugs into the CSV bulk
import as its image collaborator.
"""

import uuid

from pydantic import BaseModel, Field


class CategoryImage(BaseModel):
    """An image reference linked to meal categories."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    image: str
    categories: list[str] = Field(default_factory=list)


class CategoryImageLibrary:
    """In-memory category image store."""

    def __init__(self, images: list[CategoryImage] | None = None):
        self._images: list[CategoryImage] = list(images or [])

    @property
    def images(self) -> list[CategoryImage]:
        return list(self._images)

    def add(self, image: str, categories: list[str] | None = None) -> CategoryImage:
        entry = CategoryImage(image=image, categories=list(categories or []))
        self._images.append(entry)
        return entry

    def update(self, image_id: str, *, image: str | None = None, categories: list[str] | None = None) -> bool:
        """Update an image; returns False if the id is unknown."""
        for index, entry in enumerate(self._images):
            if entry.id == image_id:
                updates: dict = {}
                if image is not None:
                    updates["image"] = image
                if categories is not None:
                    updates["categories"] = list(categories)
                self._images[index] = entry.model_copy(update=updates)
                return True
        return False

    def remove(self, image_id: str) -> bool:
        remaining = [entry for entry in self._images if entry.id != image_id]
        if len(remaining) == len(self._images):
            return False
        self._images = remaining
        return True

    def image_for_category(self, category: str) -> str | None:
        for entry in self._images:
            if category in entry.categories:
                return entry.image
        return None

    def image_for_categories(self, categories: list[str] | None) -> str | None:
        """First image matching any category, in category order."""
        for category in categories or []:
            image = self.image_for_category(category)
            if image:
                return image
        return None

    def is_assigned(self, category: str, exclude_image_id: str | None = None) -> bool:
        return any(
            entry.id != exclude_image_id and category in entry.categories
            for entry in self._images
        )

    def already_assigned(self, categories: list[str], exclude_image_id: str | None = None) -> list[str]:
        """Categories that are already linked to another image."""
        return [category for category in categories if self.is_assigned(category, exclude_image_id)]

    async def lookup(self, categories: list[str]) -> str | None:
        return self.image_for_categories(categories)
