from __future__ import annotations

from pathlib import Path

from svgcharts import DARK_8, Chart, LinearScale, MarkerType, PointLabelPosition, ScatterView, chart, save_chart


def build_chart() -> Chart:
    builder = chart(800, 600, title="Scatter Chart", margins=(90, 40, 50, 60))
    x = LinearScale(domain=(0, 200), range=(0, builder.view_width))
    y = LinearScale(domain=(0, 100), range=(builder.view_height, 0))

    view = (
        ScatterView()
        .set_x_scale(x)
        .set_y_scale(y)
        .set_label_position(PointLabelPosition.E)
        .set_marker_type(MarkerType.CIRCLE)
        .set_colors(DARK_8)
        .load_data([(120, 90, "foo"), (12, 54, "foo"), (100, 40, "bar"), (180, 10, "baz")])
    )
    return (
        builder.add_view(view)
        .add_axis_bottom(x)
        .add_axis_left(y)
        .add_left_axis_label("Custom Y Axis Label")
        .add_bottom_axis_label("Custom X Axis Label")
        .add_legend_at("right")
        .build()
    )


def main(out_dir: Path | None = None) -> Path:
    target = Path(out_dir) if out_dir is not None else Path.cwd()
    return save_chart(build_chart(), target / "scatter-chart.svg")


if __name__ == "__main__":
    print(main())
