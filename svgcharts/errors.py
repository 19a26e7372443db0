from __future__ import annotations


class ChartDataError(ValueError):
    pass


class ScaleConfigError(ValueError):
    pass


class UnknownCategoryError(LookupError):
    def __init__(self, category: str) -> None:
        super().__init__(f"category not in band scale domain: {category!r}")
        self.category = category


class ChartConfigError(ValueError):
    pass


class ChartRenderError(RuntimeError):
    pass
