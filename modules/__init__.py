"""Helper modules for the cashew storefront."""

__all__ = [
    "product_filters",
    "text",
]
