from __future__ import annotations

from pathlib import Path

from svgcharts import BandScale, BarLabelPosition, Chart, LinearScale, VerticalBarView, chart, save_chart

WIDTH, HEIGHT = 800, 600
MARGINS = (90, 40, 50, 60)


def build_chart() -> Chart:
    builder = chart(WIDTH, HEIGHT, title="Stacked Bar Chart", margins=MARGINS)
    x = BandScale(domain=("A", "B", "C"), range=(0, builder.view_width))
    # SVG's origin is the top-left corner, so the Y range runs from the bottom up.
    y = LinearScale(domain=(0, 100), range=(builder.view_height, 0))

    data = [("A", 70, "foo"), ("B", 10, "foo"), ("C", 30, "foo"), ("A", 20, "bar"), ("A", 5, "baz")]
    view = (
        VerticalBarView()
        .set_x_scale(x)
        .set_y_scale(y)
        .set_label_position(BarLabelPosition.CENTER)
        .load_data(data)
    )
    return (
        builder.add_view(view)
        .add_axis_bottom(x)
        .add_axis_left(y)
        .add_left_axis_label("Units of Measurement")
        .add_bottom_axis_label("Categories")
        .add_legend_at("top")
        .build()
    )


def main(out_dir: Path | None = None) -> Path:
    target = Path(out_dir) if out_dir is not None else Path.cwd()
    return save_chart(build_chart(), target / "stacked-vertical-bar-chart.svg")


if __name__ == "__main__":
    print(main())
