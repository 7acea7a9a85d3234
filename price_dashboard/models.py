"""
Pydantic models for data validation and serialization.

These models are used for:
- Snapshot input posted by the market-data collaborator
- Chart layout and the drawing primitives handed to the rendering surface
- Display strings produced for the quote summary
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Literal, Union

from .formatting import format_coordinate


# ===========================================
# Snapshot Models
# ===========================================

class PricePoint(BaseModel):
    """One closing price sample."""
    timestamp: int = Field(..., description="Epoch milliseconds")
    close: float = Field(..., allow_inf_nan=False, description="Closing price")

    class Config:
        frozen = True


class ChartSnapshot(BaseModel):
    """Ordered price series, ascending by timestamp."""
    points: List[PricePoint] = Field(default_factory=list)

    class Config:
        frozen = True


class Quote(BaseModel):
    """Scalar quote fields. Any field may be missing or non-finite."""
    price: Optional[float] = None
    change: Optional[float] = None
    change_percent: Optional[float] = None
    currency: Optional[str] = None
    timestamp: Optional[float] = Field(None, description="Epoch seconds")
    day_low: Optional[float] = None
    day_high: Optional[float] = None
    previous_close: Optional[float] = None
    open: Optional[float] = None
    fifty_two_week_low: Optional[float] = None
    fifty_two_week_high: Optional[float] = None
    market_cap: Optional[float] = None
    volume: Optional[float] = None
    average_volume: Optional[float] = None
    trailing_pe: Optional[float] = Field(None, alias="trailingPE")
    forward_pe: Optional[float] = Field(None, alias="forwardPE")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class QuoteSnapshot(BaseModel):
    """One fetched bundle of quote and historical series."""
    quote: Quote = Field(default_factory=Quote)
    chart: ChartSnapshot = Field(default_factory=ChartSnapshot)


# ===========================================
# Layout Models
# ===========================================

class Padding(BaseModel):
    """Padding around the plot area, in canvas units."""
    top: float = 24
    right: float = 20
    bottom: float = 40
    left: float = 60


class ChartLayout(BaseModel):
    """Fixed canvas size and padding."""
    width: float = Field(760, gt=0)
    height: float = Field(240, gt=0)
    padding: Padding = Field(default_factory=Padding)

    @property
    def usable_width(self) -> float:
        return self.width - self.padding.left - self.padding.right

    @property
    def usable_height(self) -> float:
        return self.height - self.padding.top - self.padding.bottom

    @property
    def baseline_y(self) -> float:
        """Bottom edge of the plot area."""
        return self.height - self.padding.bottom

    @property
    def view_box(self) -> str:
        return f"0 0 {format_coordinate(self.width)} {format_coordinate(self.height)}"


# ===========================================
# Drawing Primitive Models
# ===========================================

class PlotArea(BaseModel):
    """Region inside the padding where the geometry is drawn."""
    x: float
    y: float
    width: float
    height: float


class Marker(BaseModel):
    """Point marker for one sample."""
    x: float
    y: float
    is_last: bool = False
    radius: float
    fill: str
    opacity: float


class AxisLabel(BaseModel):
    """Text label at a tick position."""
    value: float
    text: str
    x: float
    y: float
    anchor: Literal['start', 'middle', 'end'] = 'start'


class XAxisLabels(BaseModel):
    """First, middle and last timestamp labels."""
    first: AxisLabel
    mid: AxisLabel
    last: AxisLabel

    def as_list(self) -> List[AxisLabel]:
        return [self.first, self.mid, self.last]


class DrawingPrimitives(BaseModel):
    """Vector description of a renderable price chart."""
    kind: Literal['chart'] = 'chart'
    view_box: str
    width: float
    height: float
    plot_area: PlotArea
    min_close: float
    max_close: float
    y_range: float
    line_path: str
    fill_mask_path: str
    markers: List[Marker]
    y_axis_labels: List[AxisLabel]
    x_axis_labels: XAxisLabels


class InsufficientData(BaseModel):
    """Fallback state for series with fewer than two points."""
    kind: Literal['insufficient_data'] = 'insufficient_data'
    point_count: int = 0
    message: str = "Not enough data to render the chart."


ChartResult = Union[DrawingPrimitives, InsufficientData]


# ===========================================
# Summary Models
# ===========================================

class QuoteSummary(BaseModel):
    """Display strings for the dashboard metric cards and table."""
    has_live_data: bool
    last_traded_price: str
    change_class: Literal['positive', 'negative']
    delta: str
    as_of: str
    day_range: str
    previous_close: str
    open: str
    fifty_two_week_high: str
    fifty_two_week_low: str
    market_cap: str
    volume: str
    average_volume: str
    trailing_pe: str
    forward_pe: str
    trading_range: Optional[str] = None
    feed_notice: Optional[str] = None


# ===========================================
# API Response Models
# ===========================================

class APIResponse(BaseModel):
    """Generic API response model."""
    success: bool
    message: Optional[str] = None
    data: Optional[dict] = None
