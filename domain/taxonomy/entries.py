"""Category entries: the two shapes a per-origin taxonomy entry can take."""

from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field


class CategoryOnly(BaseModel):
    """A category first seen without any subcategory."""

    kind: Literal["category_only"] = "category_only"
    category: str


class CategoryWithSubcategories(BaseModel):
    """A category with its distinct subcategories, in first-seen order."""

    kind: Literal["with_subcategories"] = "with_subcategories"
    category: str
    subcategories: list[str] = Field(default_factory=list)


CategoryEntry: TypeAlias = Annotated[
    CategoryOnly | CategoryWithSubcategories,
    Field(discriminator="kind"),
]

# origin -> entries in first-seen order
TaxonomySnapshot: TypeAlias = dict[str, tuple[CategoryOnly | CategoryWithSubcategories, ...]]


def leaf_count(entry: CategoryOnly | CategoryWithSubcategories) -> int:
    """Number of leaf metrics an entry stands for (1 for a bare category)."""
    match entry:
        case CategoryWithSubcategories(subcategories=subcategories):
            return len(subcategories)
        case CategoryOnly():
            return 1
    raise TypeError(f"Unsupported category entry: {type(entry).__name__}")
