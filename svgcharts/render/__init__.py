from .svg import build_chart_element, render_chart_svg, save_chart

__all__ = ["build_chart_element", "render_chart_svg", "save_chart"]
