from svgcharts.api import chart
from svgcharts.axis import AxisLayout, AxisPosition, AxisTick, layout_axis
from svgcharts.chart import Chart, ChartBuilder, Margins
from svgcharts.colors import CATEGORY_10, DARK_8, DEFAULT_PALETTE, TABLEAU_10, Color
from svgcharts.components import BarLabelPosition, MarkerType, Orientation, PointLabelPosition
from svgcharts.errors import ChartConfigError, ChartDataError, ChartRenderError, ScaleConfigError, UnknownCategoryError
from svgcharts.legend import LegendEntry, LegendLayout, LegendMarker, layout_legend
from svgcharts.render import render_chart_svg, save_chart
from svgcharts.scales import BandScale, LinearScale, ScaleKind, generate_nice_ticks, nice_tick_increment
from svgcharts.style import DEFAULT_STYLE, ChartStyle, resolve_chart_style
from svgcharts.views import AreaSeriesView, HorizontalBarView, LineSeriesView, ScatterView, VerticalBarView

__all__ = [
    "AreaSeriesView",
    "AxisLayout",
    "AxisPosition",
    "AxisTick",
    "BandScale",
    "BarLabelPosition",
    "CATEGORY_10",
    "Chart",
    "ChartBuilder",
    "ChartConfigError",
    "ChartDataError",
    "ChartRenderError",
    "ChartStyle",
    "Color",
    "DARK_8",
    "DEFAULT_PALETTE",
    "DEFAULT_STYLE",
    "HorizontalBarView",
    "LegendEntry",
    "LegendLayout",
    "LegendMarker",
    "LineSeriesView",
    "LinearScale",
    "Margins",
    "MarkerType",
    "Orientation",
    "PointLabelPosition",
    "ScaleConfigError",
    "ScaleKind",
    "ScatterView",
    "TABLEAU_10",
    "UnknownCategoryError",
    "VerticalBarView",
    "chart",
    "generate_nice_ticks",
    "layout_axis",
    "layout_legend",
    "nice_tick_increment",
    "render_chart_svg",
    "resolve_chart_style",
    "save_chart",
]
