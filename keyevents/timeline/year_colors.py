from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping

from .model import DateWindow


class YearColorError(LookupError):
    """A dated item asked for a year the palette was never assigned to."""


PALETTE: tuple[str, ...] = (
    "#242b47",
    "#d5792e",
    "#8eb40e",
    "#597dab",
    "#5ac1c4",
    "#595959",
    "#154360",
    "#0b5345",
    "#784212",
    "#424949",
    "#17202a",
    "#e74c3c",
    "#00ff00",
    "#0000ff",
    "#252d48",
)


@dataclass(frozen=True)
class YearColors:
    colors: Mapping[int, str]

    def color_of(self, year: int) -> str:
        try:
            return self.colors[year]
        except KeyError:
            years = sorted(self.colors)
            span = f"{years[0]}..{years[-1]}" if years else "nothing"
            raise YearColorError(f"No color assigned for year {year} (palette covers {span})") from None

    def get(self, year: int | None) -> str | None:
        if year is None:
            return None
        return self.colors.get(year)

    def items(self) -> Iterator[tuple[int, str]]:
        return iter(sorted(self.colors.items()))

    def __contains__(self, year: object) -> bool:
        return year in self.colors


def assign_year_colors(window: DateWindow, palette: tuple[str, ...] = PALETTE) -> YearColors:
    # One extra year past the window max so the closing boundary year still has a color.
    colors: dict[int, str] = {}
    for index, year in enumerate(range(window.min.year, window.max.year + 2)):
        colors[year] = palette[index % len(palette)]
    return YearColors(colors=MappingProxyType(colors))
