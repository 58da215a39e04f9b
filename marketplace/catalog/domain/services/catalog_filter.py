"""
Catalog filtering.

Pure functions over product records. The displayed catalog is the
subsequence of products matching a free-text query (title or description,
case-insensitive), a category id and a seller college name. ``"all"``
disables the category or college dimension. Input order is kept; callers
pass products newest first.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

logger = logging.getLogger(__name__)

ALL = "all"


def _lowered(value) -> str:
    return (value or "").lower()


def matches_query(product, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return needle in _lowered(product.title) or needle in _lowered(product.description)


def matches_category(product, category: str) -> bool:
    if category == ALL:
        return True
    if product.category_id is None:
        return False
    return str(product.category_id) == str(category)


def matches_college(product, college: str) -> bool:
    return college == ALL or product.seller_college == college


def filter_products(products: Sequence[Any], query: str = "", category: str = ALL, college: str = ALL) -> List[Any]:
    """
    Filter products by query, category and college.

    Args:
        products: records exposing title, description, category_id and seller_college
        query: substring to look for; empty matches everything
        category: category id, or ALL
        college: seller college name, or ALL

    Returns:
        The matching products, in input order
    """
    return [
        product
        for product in products
        if matches_query(product, query) and matches_category(product, category) and matches_college(product, college)
    ]


@dataclass
class FilterSelection:
    """
    The filter values currently applied to the catalog.

    ``college_chosen`` records an explicit college choice. Until one is
    made, the first loaded profile may seed the college filter with the
    viewer's own college (once). Explicit choices, including ALL, always win.
    """

    query: str = ""
    category: str = ALL
    college: str = ALL
    college_chosen: bool = False
    seeded: bool = False

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "FilterSelection":
        """Build a selection from request query params (q, category, college)."""
        selection = cls(
            query=(params.get("q") or "").strip(),
            category=params.get("category") or ALL,
        )
        if "college" in params:
            selection.choose_college(params.get("college") or ALL)
        return selection

    def choose_college(self, college: str) -> None:
        self.college = college
        self.college_chosen = True

    def seed_from_profile(self, profile) -> bool:
        """
        Default the college filter to the viewer's college.

        Returns:
            True if the selection changed
        """
        if self.college_chosen or self.seeded:
            return False
        college = getattr(profile, "college", "") if profile is not None else ""
        if not college:
            return False
        self.college = college
        self.seeded = True
        logger.debug(f"College filter seeded from profile: {college}")
        return True

    def apply(self, products: Sequence[Any]) -> List[Any]:
        return filter_products(products, self.query, self.category, self.college)

    def as_dict(self) -> dict:
        return {"q": self.query, "category": self.category, "college": self.college}
