"""Turn draft PPTX slides into :class:`SlideContent` for the decision engine."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Iterable, List, Optional, Union

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE
from pptx.shapes.base import BaseShape

from .layout_models import ChartData, ChartSeries, SlideContent, TableData, coerce_number

LOGGER = logging.getLogger(__name__)

IMAGE_MARKER_PREFIX = "pptx-image:"

DeckSource = Union[str, os.PathLike, IO[bytes]]


def read_slide_content(slide) -> SlideContent:
    """Collect title, text, chart, table and picture content from ``slide``.

    Shapes that cannot be read are skipped with a warning; the slide itself
    always yields a :class:`SlideContent`.
    """

    content = SlideContent()
    title_shape = slide.shapes.title
    if title_shape is not None and title_shape.has_text_frame:
        content.title = title_shape.text_frame.text.strip()

    paragraphs: List[str] = []
    for shape in _iter_shapes(slide.shapes):
        if title_shape is not None and shape.shape_id == title_shape.shape_id:
            continue
        try:
            _read_shape(shape, content, paragraphs)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            LOGGER.warning("Skipping unreadable shape %r: %s", shape.name, exc)

    content.paragraph = " ".join(paragraphs)
    return content


def load_deck_contents(source: DeckSource) -> List[SlideContent]:
    """Read every slide of a draft deck from a path or binary stream."""

    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Deck not found at {path}")
        source = str(path)
    presentation = Presentation(source)
    contents = [read_slide_content(slide) for slide in presentation.slides]
    LOGGER.debug("Read %d slide(s) from deck", len(contents))
    return contents


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------

def _iter_shapes(shapes: Iterable[BaseShape]) -> Iterable[BaseShape]:
    for shape in shapes:
        if shape.shape_type == MSO_SHAPE_TYPE.GROUP:
            yield from _iter_shapes(shape.shapes)
        else:
            yield shape


def _read_shape(shape: BaseShape, content: SlideContent, paragraphs: List[str]) -> None:
    if shape.has_chart:
        if content.chart is None:
            content.chart = _chart_data(shape.chart)
        return
    if shape.has_table:
        table = _table_data(shape.table)
        if content.table is None:
            content.table = table
        return
    if shape.shape_type == MSO_SHAPE_TYPE.PICTURE:
        if not content.image_url:
            content.image_url = f"{IMAGE_MARKER_PREFIX}{shape.name}"
        return
    if shape.has_text_frame:
        lines = [p.text.strip() for p in shape.text_frame.paragraphs if p.text.strip()]
        # A single line reads as prose, several lines as a list.
        if len(lines) == 1:
            paragraphs.append(lines[0])
        else:
            content.bullets.extend(lines)


def _chart_type_name(chart) -> Optional[str]:
    try:
        name = chart.chart_type.name
    except (AttributeError, ValueError, KeyError):
        return None
    if "PIE" in name or "DOUGHNUT" in name:
        return "pie"
    if "LINE" in name:
        return "line"
    if "AREA" in name:
        return "area"
    return "bar"


def _chart_data(chart) -> ChartData:
    plot = chart.plots[0]
    return ChartData(
        categories=[str(category) for category in plot.categories],
        series=[
            ChartSeries(name=series.name or "", data=[coerce_number(v) for v in series.values])
            for series in plot.series
        ],
        chart_type=_chart_type_name(chart),
    )


def _table_data(table) -> TableData:
    rows = [[cell.text.strip() for cell in row.cells] for row in table.rows]
    if not rows:
        return TableData()
    return TableData(headers=rows[0], rows=rows[1:])
