"""Product records shared by the search and recommendation modules."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A catalog product.

    Read-only to the engine. Prices are integers in the smallest currency
    unit (cents).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Product identifier")
    slug: Optional[str] = Field(default=None, description="URL slug")
    title: str = Field(..., description="Product title")
    description: Optional[str] = Field(default=None, description="Long description")
    price: int = Field(..., ge=0, description="Price in cents")
    tags: List[str] = Field(default_factory=list, description="Free-text tags")
    stock: int = Field(default=0, ge=0, description="Units in stock")
    rating: float = Field(default=0.0, description="Average rating, 0.0-5.0")
    image_url: Optional[str] = Field(
        default=None, alias="imageUrl", description="Product image URL"
    )

    @property
    def document_text(self) -> str:
        """Title followed by tags, the text indexed for similarity."""
        return self.title + " " + " ".join(self.tags)
