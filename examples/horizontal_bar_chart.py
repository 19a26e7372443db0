from __future__ import annotations

from pathlib import Path

from svgcharts import TABLEAU_10, BandScale, Chart, HorizontalBarView, LinearScale, chart, save_chart


def build_chart() -> Chart:
    builder = chart(800, 600, title="Horizontal Stacked Bar Chart", margins=(90, 40, 50, 60))
    x = LinearScale(domain=(0, 100), range=(0, builder.view_width))
    y = BandScale(domain=("A", "B", "C"), range=(0, builder.view_height))

    view = (
        HorizontalBarView()
        .set_x_scale(x)
        .set_y_scale(y)
        .set_colors(TABLEAU_10)
        .set_label_rounding_precision(1)
        .load_data([("A", 70, "foo"), ("B", 10, "foo"), ("C", 30, "foo"), ("A", 20, "bar"), ("A", 5, "baz")])
    )
    return (
        builder.add_view(view)
        .add_axis_top(x)
        .add_axis_left(y)
        .add_top_axis_label("Units of Measurement")
        .add_left_axis_label("Categories")
        .add_legend_at("bottom")
        .build()
    )


def main(out_dir: Path | None = None) -> Path:
    target = Path(out_dir) if out_dir is not None else Path.cwd()
    return save_chart(build_chart(), target / "horizontal-bar-chart.svg")


if __name__ == "__main__":
    print(main())
