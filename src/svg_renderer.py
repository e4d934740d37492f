"""Render a crossword grid as standalone SVG."""

from __future__ import annotations

from models import Crossword

ERROR_FILL = "#f8c8c8"


def render_svg(
    puzzle: Crossword,
    output_path: str,
    show_answers: bool = False,
    user_grid: list[list[str]] | None = None,
    errors: list[list[bool]] | None = None,
    cell_size: float | None = None,
) -> None:
    """Write the grid to an SVG file.

    With *show_answers* the solution letters are drawn; otherwise letters come
    from *user_grid* when given. Cells flagged in *errors* are shaded.
    """
    extent = max(puzzle.rows, puzzle.cols)
    if cell_size is None:
        cell_size = _default_cell_size(extent)

    number_font = _number_font_size(extent)
    letter_font = cell_size * 0.45
    width = cell_size * puzzle.cols
    height = cell_size * puzzle.rows

    parts: list[str] = []
    parts.append(
        f'<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">\n'
    )

    for r in range(puzzle.rows):
        for c in range(puzzle.cols):
            cell = puzzle.grid[r][c]
            x = c * cell_size
            y = r * cell_size

            if cell.is_block:
                parts.append(
                    f'  <rect x="{x}" y="{y}" width="{cell_size}" '
                    f'height="{cell_size}" fill="black"/>\n'
                )
                continue

            fill = ERROR_FILL if errors and errors[r][c] else "white"
            parts.append(
                f'  <rect x="{x}" y="{y}" width="{cell_size}" '
                f'height="{cell_size}" fill="{fill}" '
                f'stroke="black" stroke-width="0.5"/>\n'
            )

            if cell.number is not None:
                tx = x + 1.5
                ty = y + number_font + 1
                parts.append(
                    f'  <text x="{tx}" y="{ty}" '
                    f'font-family="Helvetica, Arial, sans-serif" '
                    f'font-weight="bold" font-size="{number_font}" '
                    f'fill="black">{cell.number}</text>\n'
                )

            letter = cell.solution if show_answers else _typed(user_grid, r, c)
            if letter:
                cx = x + cell_size * 0.55
                cy = y + cell_size * 0.58
                parts.append(
                    f'  <text x="{cx}" y="{cy}" '
                    f'text-anchor="middle" dominant-baseline="central" '
                    f'font-family="Helvetica, Arial, sans-serif" '
                    f'font-size="{letter_font}" '
                    f'fill="black">{letter}</text>\n'
                )

    # Outer border
    parts.append(
        f'  <rect x="0" y="0" width="{width}" height="{height}" '
        f'fill="none" stroke="black" stroke-width="1.5"/>\n'
    )
    parts.append('</svg>\n')

    with open(output_path, 'w', encoding='utf-8') as f:
        f.writelines(parts)


def render_puzzle_svg(puzzle: Crossword, output_path: str) -> None:
    """Render the empty puzzle grid (numbers only) to SVG."""
    render_svg(puzzle, output_path, show_answers=False)


def render_answer_svg(puzzle: Crossword, output_path: str) -> None:
    """Render the grid with solution letters to SVG."""
    render_svg(puzzle, output_path, show_answers=True)


def _typed(user_grid: list[list[str]] | None, r: int, c: int) -> str:
    if not user_grid:
        return ""
    return (user_grid[r][c] or "").upper()


def _default_cell_size(extent: int) -> float:
    if extent <= 15:
        return 24.0
    elif extent <= 17:
        return 21.0
    else:
        return 17.0


def _number_font_size(extent: int) -> float:
    if extent <= 13:
        return 8.5
    elif extent <= 15:
        return 8.0
    elif extent <= 17:
        return 7.0
    else:
        return 6.0
