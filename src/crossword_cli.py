#!/usr/bin/env python3
"""Command-line front end for building and printing crosswords.

Puzzles live in JSON documents (the same format the editor exports):
  new      create an empty grid
  block    toggle a block cell
  letter   set or clear a solution letter
  clue     set the clue of an entry (e.g. A-1, D-7)
  show     print the grid and clue lists
  render   write PDF, puzzle/answer SVG and clue XLSX
  clues-import   copy clues from an XLSX workbook into the puzzle
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import puzzle_engine
from models import Crossword, CrosswordError
from serialization import export_puzzle, import_puzzle


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Build, edit and print crossword puzzles.")
    sub = p.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create an empty puzzle")
    new.add_argument("rows", type=int)
    new.add_argument("cols", type=int)
    new.add_argument("--title", default=puzzle_engine.DEFAULT_TITLE,
                     help=f'Title text (default: "{puzzle_engine.DEFAULT_TITLE}")')
    new.add_argument("--author", default=puzzle_engine.DEFAULT_AUTHOR,
                     help=f'Author (default: "{puzzle_engine.DEFAULT_AUTHOR}")')
    new.add_argument("-o", "--output", default=None,
                     help="Output JSON path (default: <title>.json)")

    block = sub.add_parser("block", help="Toggle a block cell")
    block.add_argument("puzzle")
    block.add_argument("row", type=int)
    block.add_argument("col", type=int)

    letter = sub.add_parser("letter", help="Set a solution letter (omit to clear)")
    letter.add_argument("puzzle")
    letter.add_argument("row", type=int)
    letter.add_argument("col", type=int)
    letter.add_argument("letter", nargs="?", default=None)

    clue = sub.add_parser("clue", help="Set the clue of an entry")
    clue.add_argument("puzzle")
    clue.add_argument("entry_id")
    clue.add_argument("text")

    show = sub.add_parser("show", help="Print grid and clues")
    show.add_argument("puzzle")
    show.add_argument("--answers", action="store_true", help="Show solution letters")

    render = sub.add_parser("render", help="Write PDF, SVG and XLSX output")
    render.add_argument("puzzle")
    render.add_argument("--out-dir", default=None,
                        help="Output folder (default: 'output' next to the puzzle)")

    clues_import = sub.add_parser("clues-import", help="Copy clues from an XLSX file")
    clues_import.add_argument("puzzle")
    clues_import.add_argument("xlsx")
    return p


def main(argv: list[str] | None = None) -> None:
    args = _build_arg_parser().parse_args(argv)
    try:
        _COMMANDS[args.command](args)
    except CrosswordError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _load(path: str) -> Crossword:
    path = Path(path)
    if not path.exists():
        raise CrosswordError(f"File not found: {path}")
    return import_puzzle(path.read_text(encoding="utf-8"))


def _save(puzzle: Crossword, path: str) -> None:
    Path(path).write_text(export_puzzle(puzzle), encoding="utf-8")


def _cmd_new(args) -> None:
    puzzle = puzzle_engine.create_empty(args.rows, args.cols, args.title, args.author)
    output = args.output or f"{args.title or 'crossword'}.json"
    _save(puzzle, output)
    print(f"Output: {output} ({len(puzzle.entries)} entries)", file=sys.stderr)


def _cmd_block(args) -> None:
    puzzle = _load(args.puzzle)
    puzzle_engine.toggle_block(puzzle, args.row, args.col)
    _save(puzzle, args.puzzle)


def _cmd_letter(args) -> None:
    puzzle = _load(args.puzzle)
    puzzle_engine.set_letter(puzzle, args.row, args.col, args.letter)
    _save(puzzle, args.puzzle)


def _cmd_clue(args) -> None:
    puzzle = _load(args.puzzle)
    if puzzle.entry(args.entry_id) is None:
        print(f"Warning: no entry '{args.entry_id}', nothing changed", file=sys.stderr)
        return
    puzzle_engine.set_clue(puzzle, args.entry_id, args.text)
    _save(puzzle, args.puzzle)


def _cmd_show(args) -> None:
    puzzle = _load(args.puzzle)
    print(format_puzzle(puzzle, show_answers=args.answers))


def _cmd_render(args) -> None:
    from pdf_renderer import render_pdf
    from svg_renderer import render_answer_svg, render_puzzle_svg
    from xlsx_writer import write_clues_xlsx

    puzzle = _load(args.puzzle)
    stem = Path(args.puzzle).stem
    out_dir = Path(args.out_dir) if args.out_dir else Path(args.puzzle).parent / "output"
    out_dir.mkdir(parents=True, exist_ok=True)

    pdf_path = str(out_dir / f"{stem}.pdf")
    xlsx_path = str(out_dir / f"{stem}_clues.xlsx")
    puzzle_svg_path = str(out_dir / f"{stem}_puzzle.svg")
    answer_svg_path = str(out_dir / f"{stem}_answer.svg")

    render_pdf(puzzle, pdf_path)
    write_clues_xlsx(puzzle, xlsx_path)
    render_puzzle_svg(puzzle, puzzle_svg_path)
    render_answer_svg(puzzle, answer_svg_path)

    for path in (pdf_path, xlsx_path, puzzle_svg_path, answer_svg_path):
        print(f"Output: {path}", file=sys.stderr)


def _cmd_clues_import(args) -> None:
    from xlsx_reader import apply_clues, read_clues

    puzzle = _load(args.puzzle)
    clues = read_clues(args.xlsx)
    applied = apply_clues(puzzle, clues)
    _save(puzzle, args.puzzle)
    print(f"Applied {applied}/{len(clues)} clues", file=sys.stderr)


def format_puzzle(puzzle: Crossword, show_answers: bool = False) -> str:
    """Plain-text grid ('#' blocks, '.' open cells) followed by clue lists."""
    lines = [puzzle.title or "CROSSWORD"]
    if puzzle.author:
        lines.append(f"by {puzzle.author}")
    lines.append("")
    for row in puzzle.grid:
        symbols = []
        for cell in row:
            if cell.is_block:
                symbols.append("#")
            elif show_answers and cell.solution:
                symbols.append(cell.solution)
            else:
                symbols.append(".")
        lines.append(" ".join(symbols))

    for label, entries in (("ACROSS", puzzle_engine.across_entries(puzzle)),
                           ("DOWN", puzzle_engine.down_entries(puzzle))):
        lines.append("")
        lines.append(label)
        for entry in entries:
            lines.append(f"  {entry.number}. {entry.clue} ({entry.length})")
    return "\n".join(lines)


_COMMANDS = {
    "new": _cmd_new,
    "block": _cmd_block,
    "letter": _cmd_letter,
    "clue": _cmd_clue,
    "show": _cmd_show,
    "render": _cmd_render,
    "clues-import": _cmd_clues_import,
}


if __name__ == "__main__":
    main()
