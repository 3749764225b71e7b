"""Report models: a row-oriented view of a taxonomy snapshot."""

from pydantic import BaseModel, Field


class SubcategoryCell(BaseModel):
    """One subcategory, re-split into its leading segment and the rest."""

    base: str
    remainder: str = ""


class ReportRow(BaseModel):
    """One (origin, category) row of the report."""

    origin: str | None = Field(
        default=None,
        description="Origin name; only set on the first row of each origin.",
    )
    origin_rowspan: int = Field(
        default=0,
        description="Number of rows the origin cell spans; 0 on continuation rows.",
    )
    category: str
    has_subcategories: bool = False
    subcategories: list[SubcategoryCell] = Field(default_factory=list)


class TaxonomyReport(BaseModel):
    """Rendered-ready taxonomy report."""

    rows: list[ReportRow] = Field(default_factory=list)
    total_metrics: int = 0

    @property
    def origins(self) -> list[str]:
        return [row.origin for row in self.rows if row.origin is not None]
