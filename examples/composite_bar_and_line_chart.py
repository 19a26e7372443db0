from __future__ import annotations

from pathlib import Path

import numpy as np

from svgcharts import (
    AreaSeriesView,
    BandScale,
    Chart,
    LineSeriesView,
    LinearScale,
    MarkerType,
    VerticalBarView,
    chart,
    save_chart,
)

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun")


def build_chart() -> Chart:
    builder = chart(900, title="Revenue by Month", margins=(60, 60, 80, 80))
    x = BandScale(domain=MONTHS, range=(0, builder.view_width))
    y = LinearScale(domain=(0, 2600), range=(builder.view_height, 0)).nice()

    revenue = np.asarray([1200.0, 1350.0, 980.0, 1600.0, 1720.0, 1540.0])
    target = revenue * 1.15
    bars = (
        VerticalBarView()
        .set_x_scale(x)
        .set_y_scale(y)
        .set_label_visibility(False)
        .set_custom_data_label("Revenue")
        .load_data(list(zip(MONTHS, revenue.tolist())))
    )
    trend = (
        AreaSeriesView()
        .set_x_scale(x)
        .set_y_scale(y)
        .set_colors(["#ff7f0e55"])
        .set_label_visibility(False)
        .set_custom_data_label("Trend")
        .load_data(list(zip(MONTHS, (np.cumsum(revenue) / np.arange(1, 7)).tolist())))
    )
    goal = (
        LineSeriesView()
        .set_x_scale(x)
        .set_y_scale(y)
        .set_colors(["#2ca02c"])
        .set_marker_type(MarkerType.SQUARE)
        .set_label_visibility(False)
        .load_data([(m, t, "Target") for m, t in zip(MONTHS, target.tolist())])
    )
    return (
        builder.add_view(trend)
        .add_view(bars)
        .add_view(goal)
        .add_axis_bottom(x)
        .add_axis_left(y)
        .set_left_axis_tick_label_format(".2s")
        .add_left_axis_label("Revenue")
        .add_legend_at("bottom")
        .build()
    )


def main(out_dir: Path | None = None) -> Path:
    target = Path(out_dir) if out_dir is not None else Path.cwd()
    return save_chart(build_chart(), target / "composite-bar-and-line-chart.svg")


if __name__ == "__main__":
    print(main())
