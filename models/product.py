"""
Product data model.

Products are owned by the catalog and read-only everywhere else. The cart
copies name/price/image into its own lines at add time.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field, TypeAdapter

from .base import CamelModel


class Product(CamelModel):
    """A catalog product (one cashew grade or preparation)."""

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    price: Decimal = Field(ge=0)
    """Price per kg in rupees."""

    category: str
    weight: str = ""
    """Display string, e.g. '25kg to 250kg'."""

    image: str = ""
    images: List[str] = Field(default_factory=list)
    stock: int = Field(default=0, ge=0)
    is_featured: bool = False
    is_archived: bool = False

    # Extended catalog metadata
    grade: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_organic: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def primary_image(self) -> str:
        """First image to display for the product."""
        if self.image:
            return self.image
        return self.images[0] if self.images else ""


ProductList = TypeAdapter(List[Product])
"""Validator for a whole catalog payload."""
