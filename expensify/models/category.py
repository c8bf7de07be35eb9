"""
Category Taxonomy

The taxonomy is fixed and not user-editable. Presentation attributes
(icon, colors) travel with each category so the UI never hard-codes them.

DESIGN DECISION: Expenses store the category *name*, not an enum member.
An unrecognized name is kept as-is at write time and resolved to the
fallback category only when looked up through get_category().
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """A spending category with its display metadata."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Unique human-readable label"
    )
    icon: str = Field(..., description="Emoji shown next to the category")
    color: str = Field(..., description="Accent color (hex)")
    background: str = Field(..., description="Translucent background color")


CATEGORIES: tuple[Category, ...] = (
    Category(name="Food & Dining", icon="🍜", color="#FF6B6B", background="rgba(255,107,107,0.12)"),
    Category(name="Transport", icon="🚖", color="#4EC9FF", background="rgba(78,201,255,0.12)"),
    Category(name="Shopping", icon="🛍️", color="#FFD166", background="rgba(255,209,102,0.12)"),
    Category(name="Entertainment", icon="🎮", color="#A78BFA", background="rgba(167,139,250,0.12)"),
    Category(name="Health", icon="💊", color="#06D6A0", background="rgba(6,214,160,0.12)"),
    Category(name="Bills & Utilities", icon="⚡", color="#F4A261", background="rgba(244,162,97,0.12)"),
    Category(name="Education", icon="📚", color="#48CAE4", background="rgba(72,202,228,0.12)"),
    Category(name="Other", icon="📦", color="#C9C9C9", background="rgba(201,201,201,0.12)"),
)

FALLBACK_CATEGORY: Category = CATEGORIES[-1]

# New expenses default to the first entry of the taxonomy
DEFAULT_CATEGORY: Category = CATEGORIES[0]

_BY_NAME: dict[str, Category] = {category.name: category for category in CATEGORIES}


def get_category(name: Optional[str]) -> Category:
    """
    Look up a category by exact name.

    Always succeeds: unknown or empty names resolve to FALLBACK_CATEGORY ("Other").
    """
    if name is None:
        return FALLBACK_CATEGORY
    return _BY_NAME.get(name, FALLBACK_CATEGORY)


def category_names() -> list[str]:
    """Get all category names in taxonomy order."""
    return [category.name for category in CATEGORIES]
