"""Render a crossword to a printable PDF using ReportLab.

Layout: title banner, grid centered at top, across and down clues in
multi-column format below the grid; page 2 holds the answer key.
"""

from __future__ import annotations

from dataclasses import dataclass
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import Paragraph

from models import Crossword, Entry
from puzzle_engine import across_entries, down_entries

PAGE_W, PAGE_H = letter  # 612 x 792
MARGIN = 36
SECTION_HEADER_H = 14.0
GRID_GAP = 8  # banner to grid top

# (kind, markup or label, height); kind is "header" or "clue"
RenderItem = tuple[str, str, float]


@dataclass
class LayoutParams:
    """All computed layout measurements."""

    page_w: float = PAGE_W
    page_h: float = PAGE_H
    margin: float = MARGIN
    usable_w: float = PAGE_W - 2 * MARGIN

    # Grid
    rows: int = 13
    cols: int = 13
    cell_size: float = 24.0
    grid_x: float = 0.0
    grid_y: float = 0.0  # top of grid in page coords

    # Title banner
    banner_h: float = 28.0
    banner_y: float = 0.0

    # Fonts
    clue_font_size: float = 9.0
    clue_leading: float = 10.5
    space_after: float = 1.5
    number_font_size: float = 6.0

    # Clue zone (all clues below grid)
    clue_zone_y: float = 0.0
    clue_cols: int = 3
    clue_gutter: float = 12.0
    clue_col_w: float = 0.0

    title: str = "CROSSWORD"


def render_pdf(puzzle: Crossword, output_path: str) -> None:
    """Draw page 1 (puzzle + clues) and page 2 (answer key)."""
    from reportlab.pdfgen.canvas import Canvas

    across, down = across_entries(puzzle), down_entries(puzzle)
    layout = _compute_layout(puzzle.rows, puzzle.cols, across, down, puzzle.title or "CROSSWORD")
    layout = _adaptive_fit(across, down, layout)

    c = Canvas(output_path, pagesize=letter)
    c.setTitle(puzzle.title or "Crossword")
    c.setAuthor(puzzle.author or "")

    _draw_title_banner(c, layout)
    _draw_grid(c, puzzle, layout, show_answers=False)
    _draw_clue_zone(c, across, down, layout)
    c.showPage()

    _draw_answer_key_page(c, puzzle, layout)
    c.showPage()

    c.save()


def _compute_layout(
    rows: int,
    cols: int,
    across: list[Entry],
    down: list[Entry],
    title: str,
) -> LayoutParams:
    lp = LayoutParams(rows=rows, cols=cols, title=title)

    extent = max(rows, cols)
    if extent <= 13:
        lp.cell_size = 24.0
        lp.number_font_size = 8.5
    elif extent <= 15:
        lp.cell_size = 24.0
        lp.number_font_size = 8.0
    elif extent <= 17:
        lp.cell_size = 21.0
        lp.number_font_size = 7.0
    else:
        lp.cell_size = 17.0
        lp.number_font_size = 6.0

    # Very wide or tall grids must still fit between the margins.
    usable_h = lp.page_h - 2 * lp.margin - lp.banner_h - GRID_GAP
    lp.cell_size = min(lp.cell_size, lp.usable_w / cols, usable_h / rows)

    lp.clue_cols = 3 if len(across) + len(down) < 40 else 4

    _recompute_positions(lp)
    return lp


def _recompute_positions(lp: LayoutParams) -> None:
    """(Re)calculate derived positions from current params."""
    lp.banner_y = lp.page_h - lp.margin - lp.banner_h

    lp.grid_x = (lp.page_w - lp.cell_size * lp.cols) / 2
    lp.grid_y = lp.banner_y - GRID_GAP

    grid_bottom_y = lp.grid_y - lp.cell_size * lp.rows
    lp.clue_zone_y = grid_bottom_y - 12

    total_gutter = lp.clue_gutter * (lp.clue_cols - 1)
    lp.clue_col_w = (lp.usable_w - total_gutter) / lp.clue_cols


def _adaptive_fit(
    across: list[Entry],
    down: list[Entry],
    layout: LayoutParams,
) -> LayoutParams:
    """Step through adjustments until all content fits on page 1."""
    for _ in range(12):
        if _content_fits(across, down, layout):
            return layout

        if layout.clue_font_size > 6.0:
            layout.clue_font_size -= 0.5
            layout.clue_leading = layout.clue_font_size + 1.5
            continue

        if layout.space_after > 0.5:
            layout.space_after = 0.5
            continue

        if layout.clue_cols < 5:
            layout.clue_cols += 1
            _recompute_positions(layout)
            continue

        if layout.cell_size > 12:
            layout.cell_size -= 1
            _recompute_positions(layout)
            continue

        break

    return layout


def _content_fits(across: list[Entry], down: list[Entry], layout: LayoutParams) -> bool:
    columns = _distribute(_render_items(across, down, layout), layout)
    tallest = max((_column_height(col) for col in columns), default=0.0)
    return tallest <= layout.clue_zone_y - layout.margin


def _render_items(across: list[Entry], down: list[Entry], layout: LayoutParams) -> list[RenderItem]:
    """Ordered headers and measured clue paragraphs."""
    style = _clue_style(layout)
    items: list[RenderItem] = []
    for label, entries in (("ACROSS", across), ("DOWN", down)):
        items.append(("header", label, SECTION_HEADER_H))
        for entry in entries:
            markup = _clue_markup(entry)
            _, h = Paragraph(markup, style).wrap(layout.clue_col_w, 10000)
            items.append(("clue", markup, h + style.spaceAfter))
    return items


def _distribute(items: list[RenderItem], layout: LayoutParams) -> list[list[RenderItem]]:
    """Split items into balanced columns, never stranding a header at the bottom."""
    total = sum(_item_height(item) for item in items)
    target_per_col = total / layout.clue_cols

    columns: list[list[RenderItem]] = [[] for _ in range(layout.clue_cols)]
    col_heights = [0.0] * layout.clue_cols
    col_idx = 0

    for item in items:
        item_h = _item_height(item)
        if (col_idx < layout.clue_cols - 1
                and col_heights[col_idx] > 0
                and col_heights[col_idx] + item_h > target_per_col * 1.05):
            if columns[col_idx] and columns[col_idx][-1][0] == "header":
                stray = columns[col_idx].pop()
                col_heights[col_idx] -= _item_height(stray)
                col_idx += 1
                columns[col_idx].append(stray)
                col_heights[col_idx] += _item_height(stray)
            else:
                col_idx += 1

        columns[col_idx].append(item)
        col_heights[col_idx] += item_h

    return columns


def _item_height(item: RenderItem) -> float:
    kind, _, h = item
    return h + 4 if kind == "header" else h


def _column_height(column: list[RenderItem]) -> float:
    return sum(_item_height(item) for item in column)


def _clue_style(layout: LayoutParams) -> ParagraphStyle:
    return ParagraphStyle(
        "ClueStyle",
        fontName="Helvetica",
        fontSize=layout.clue_font_size,
        leading=layout.clue_leading,
        spaceAfter=layout.space_after,
    )


def _clue_markup(entry: Entry) -> str:
    """Format clue as ``<b>N.</b> text`` with XML escaping."""
    return f"<b>{entry.number}.</b> {escape(entry.clue)}"


# ─── Drawing functions ──────────────────────────────────────────────────────


def _draw_title_banner(c, layout: LayoutParams) -> None:
    """Black rect + white centered bold text."""
    x = layout.margin
    y = layout.banner_y
    w = layout.usable_w
    h = layout.banner_h

    c.setFillColorRGB(0, 0, 0)
    c.rect(x, y, w, h, fill=1, stroke=0)

    c.setFillColorRGB(1, 1, 1)
    c.setFont("Helvetica-Bold", 16)
    text_w = stringWidth(layout.title, "Helvetica-Bold", 16)
    tx = x + (w - text_w) / 2
    ty = y + (h - 16) / 2 + 2
    c.drawString(tx, ty, layout.title)


def _draw_grid(c, puzzle: Crossword, layout: LayoutParams, show_answers: bool) -> None:
    """Blocks, open cells, numbers and optionally the solution letters."""
    x0 = layout.grid_x
    y0 = layout.grid_y
    cs = layout.cell_size

    for r in range(puzzle.rows):
        for col in range(puzzle.cols):
            cell = puzzle.grid[r][col]
            cx = x0 + col * cs
            cy = y0 - (r + 1) * cs

            if cell.is_block:
                c.setFillColorRGB(0, 0, 0)
                c.rect(cx, cy, cs, cs, fill=1, stroke=0)
                continue

            c.setFillColorRGB(1, 1, 1)
            c.setStrokeColorRGB(0, 0, 0)
            c.setLineWidth(0.5)
            c.rect(cx, cy, cs, cs, fill=1, stroke=1)

            if cell.number is not None:
                c.setFillColorRGB(0, 0, 0)
                c.setFont("Helvetica-Bold", layout.number_font_size)
                c.drawString(
                    cx + 1.5,
                    cy + cs - layout.number_font_size - 1,
                    str(cell.number),
                )

            # Letter shifted down-right to avoid the number
            if show_answers and cell.solution:
                c.setFillColorRGB(0, 0, 0)
                font_size = cs * 0.45
                c.setFont("Helvetica", font_size)
                lw = stringWidth(cell.solution, "Helvetica", font_size)
                lx = cx + cs * 0.55 - lw / 2
                ly = cy + cs * 0.42 - font_size / 2
                c.drawString(lx, ly, cell.solution)

    c.setStrokeColorRGB(0, 0, 0)
    c.setLineWidth(1.5)
    c.rect(x0, y0 - puzzle.rows * cs, puzzle.cols * cs, puzzle.rows * cs, fill=0, stroke=1)


def _draw_clue_zone(c, across: list[Entry], down: list[Entry], layout: LayoutParams) -> None:
    style = _clue_style(layout)
    columns = _distribute(_render_items(across, down, layout), layout)

    for i, col_items in enumerate(columns):
        col_x = layout.margin + i * (layout.clue_col_w + layout.clue_gutter)
        current_y = layout.clue_zone_y

        for kind, content, h in col_items:
            if kind == "header":
                _draw_section_header(c, content, col_x, current_y, layout.clue_col_w)
                current_y -= SECTION_HEADER_H + 4
            else:
                p = Paragraph(content, style)
                p.wrap(layout.clue_col_w, 10000)
                p.drawOn(c, col_x, current_y - h)
                current_y -= h


def _draw_section_header(c, text: str, x: float, y: float, width: float) -> None:
    """Black rect + white bold text."""
    h = SECTION_HEADER_H
    c.setFillColorRGB(0, 0, 0)
    c.rect(x, y - h, width, h, fill=1, stroke=0)

    c.setFillColorRGB(1, 1, 1)
    c.setFont("Helvetica-Bold", 9)
    c.drawString(x + 4, y - h + 3.5, text)


def _draw_answer_key_page(c, puzzle: Crossword, layout: LayoutParams) -> None:
    ak_layout = LayoutParams(
        rows=layout.rows,
        cols=layout.cols,
        cell_size=layout.cell_size,
        number_font_size=layout.number_font_size,
        title="ANSWER KEY",
    )
    ak_layout.banner_y = ak_layout.page_h - ak_layout.margin - ak_layout.banner_h
    ak_layout.grid_x = (ak_layout.page_w - ak_layout.cell_size * ak_layout.cols) / 2
    ak_layout.grid_y = ak_layout.banner_y - 20

    _draw_title_banner(c, ak_layout)
    _draw_grid(c, puzzle, ak_layout, show_answers=True)
