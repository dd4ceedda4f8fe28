"""Pydantic models for datasets, chart plans and resolved dashboards"""
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

# Reserved identifier of the synthetic "number of rows" column
ROW_COUNT_COLUMN_ID = "*"


def localized_text(value: Any, language: str = "en") -> str:
    """
    Flatten a platform localized string such as {"en": "Sales"}.

    Falls back to the first available translation when the requested
    language is missing.
    """
    if value is None:
        return ""
    if isinstance(value, dict):
        if value.get(language):
            return str(value[language])
        for text in value.values():
            if text:
                return str(text)
        return ""
    return str(value)


# ============================================================================
# Dataset Models (read from the platform)
# ============================================================================

class ColumnType(str, Enum):
    """Semantic column types known to the platform"""
    NUMERIC = "numeric"
    DATETIME = "datetime"
    HIERARCHY = "hierarchy"
    SPATIAL = "spatial"


class Column(BaseModel):
    """Column metadata"""
    id: str
    name: str
    type: str = ColumnType.HIERARCHY.value

    @property
    def is_row_count(self) -> bool:
        return self.id == ROW_COUNT_COLUMN_ID

    @property
    def is_datetime(self) -> bool:
        return self.type == ColumnType.DATETIME.value


class Dataset(BaseModel):
    """Snapshot of a dataset as observed at poll time"""
    id: str
    name: str
    columns: List[Column] = Field(default_factory=list)

    @classmethod
    def from_securable(cls, row: Dict[str, Any], language: str = "en") -> "Dataset":
        """Build a Dataset from a securable row returned by the platform API"""
        columns = [
            Column(
                id=str(col["id"]),
                name=localized_text(col.get("name"), language),
                type=col.get("type") or ColumnType.HIERARCHY.value,
            )
            for col in row.get("columns") or []
        ]
        return cls(
            id=str(row["id"]),
            name=localized_text(row.get("name"), language),
            columns=columns,
        )


def row_count_column() -> Column:
    """The pseudo-column standing for "count of rows" """
    return Column(id=ROW_COUNT_COLUMN_ID, name="Count", type=ColumnType.NUMERIC.value)


# ============================================================================
# Chart Plan Models (parsed from the completion model)
# ============================================================================

class ChartIntent(BaseModel):
    """One chart proposed by the model; every field is untrusted free text"""
    title: str = ""
    type: str = ""
    metric: str = ""
    metric_aggregation: str = ""
    dimension: str = ""

    @field_validator("title", "type", "metric", "metric_aggregation", "dimension", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> str:
        if value is None or isinstance(value, (dict, list)):
            return ""
        return str(value)


class ChartPlan(BaseModel):
    """Dashboard title plus the ordered chart proposals"""
    dashboard_title: str = ""
    charts: List[ChartIntent] = Field(default_factory=list)


# ============================================================================
# Resolved Chart Models (ready for persistence)
# ============================================================================

class ChartKind(str, Enum):
    """Supported chart kinds, valued by their platform item type"""
    BAR = "bar-chart"
    LINE = "line-chart"
    DONUT = "donut-chart"
    AREA = "area-chart"
    COLUMN = "column-chart"


class ChartOption(BaseModel):
    """Fixed display option applied to a chart kind"""
    name: str
    value: Any


class ChartTypeMatch(BaseModel):
    """Chart kind with the slot names its encodings go into"""
    kind: ChartKind
    measure_slot: str
    dimension_slot: str
    options: List[ChartOption] = Field(default_factory=list)


class MeasureEncoding(BaseModel):
    column: Column
    aggregation: str
    format: str


class DimensionEncoding(BaseModel):
    column: Column
    level: Optional[int] = None


class GridPosition(BaseModel):
    """Placement in platform layout units"""
    row: int
    col: int
    size_x: int
    size_y: int


class ResolvedChart(BaseModel):
    """Fully specified chart"""
    kind: ChartKind
    title: str
    measure_slot: str
    dimension_slot: str
    measure: MeasureEncoding
    dimension: DimensionEncoding
    position: GridPosition
    options: List[ChartOption] = Field(default_factory=list)

    def to_view(self, dataset_id: str, language: str = "en") -> Dict[str, Any]:
        """Render as a dashboard view item"""
        options: Dict[str, Any] = {"title": {language: self.title}}
        for option in self.options:
            options[option.name] = option.value

        measure_content = {
            "column": self.measure.column.id,
            "set": dataset_id,
            "label": {language: self.measure.column.name},
            "type": self.measure.column.type,
            "format": self.measure.format,
            "aggregationFunc": self.measure.aggregation,
        }
        dimension_content: Dict[str, Any] = {
            "column": self.dimension.column.id,
            "set": dataset_id,
            "label": {language: self.dimension.column.name},
            "type": self.dimension.column.type,
        }
        if self.dimension.level is not None:
            dimension_content["level"] = self.dimension.level

        return {
            "id": str(uuid4()),
            "type": self.kind.value,
            "position": {
                "row": self.position.row,
                "col": self.position.col,
                "sizeX": self.position.size_x,
                "sizeY": self.position.size_y,
            },
            "options": options,
            "slots": [
                {"name": self.measure_slot, "content": [measure_content]},
                {"name": self.dimension_slot, "content": [dimension_content]},
            ],
        }


class Dashboard(BaseModel):
    """Dashboard envelope handed to the platform"""
    dataset_id: str
    name: str
    description: str
    theme: str
    charts: List[ResolvedChart] = Field(default_factory=list)

    def to_securable(self, language: str = "en") -> Dict[str, Any]:
        """Render as the properties of a new dashboard securable"""
        return {
            "type": "dashboard",
            "name": {language: self.name},
            "description": {language: self.description},
            "contents": {
                "theme": {"id": self.theme},
                "views": [chart.to_view(self.dataset_id, language) for chart in self.charts],
            },
        }


class CompositionResult(BaseModel):
    """Outcome of composing one dataset's dashboard"""
    dataset_id: str
    success: bool
    dashboard_id: Optional[str] = None
    chart_count: int = 0
    error: Optional[str] = None
