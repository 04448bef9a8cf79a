"""Printable rendering of a Sudoku board."""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..core.board import SudokuBoard, SIZE, BOX_SIZE

log = logging.getLogger(__name__)

# US letter, in inches
PAGE_SIZE = (8.5, 11.0)
HINT_FONT_SIZE = 30
CANDIDATE_FONT_SIZE = 8


def draw_grid(board: SudokuBoard, filename: Union[str, Path],
              show_candidates: bool = False, title: str = "") -> str:
    """
    Draw a board on a single page and save it.

    The output format follows the file extension (``.pdf``, ``.png``, ...).

    Args:
        board: Board to draw.
        filename: Output path; parent directories are created.
        show_candidates: Print the remaining candidates in small digits
                         inside each empty cell.
        title: Optional heading above the grid.

    Returns:
        The path written.
    """
    filename = str(filename)
    parent = os.path.dirname(filename)
    if parent:
        os.makedirs(parent, exist_ok=True)

    fig = plt.figure(figsize=PAGE_SIZE)
    # Square drawing area centred horizontally, in the top part of the page
    side = 7.5 / PAGE_SIZE[0]
    ax = fig.add_axes([(1 - side) / 2, 0.25, side, side * PAGE_SIZE[0] / PAGE_SIZE[1]])
    ax.set_xlim(0, SIZE)
    ax.set_ylim(SIZE, 0)
    ax.set_aspect("equal")
    ax.axis("off")

    for i in range(SIZE + 1):
        width = 3.0 if i % BOX_SIZE == 0 else 0.8
        ax.plot([0, SIZE], [i, i], color="black", linewidth=width)
        ax.plot([i, i], [0, SIZE], color="black", linewidth=width)

    for row in range(SIZE):
        for col in range(SIZE):
            value = board.get(row, col)
            if value:
                ax.text(col + 0.5, row + 0.5, str(value), ha="center", va="center",
                        fontsize=HINT_FONT_SIZE, fontweight="bold")
            elif show_candidates:
                for digit in sorted(board.get_candidates(row, col)):
                    sub_row, sub_col = divmod(digit - 1, BOX_SIZE)
                    ax.text(col + (sub_col + 0.5) / BOX_SIZE, row + (sub_row + 0.5) / BOX_SIZE,
                            str(digit), ha="center", va="center",
                            fontsize=CANDIDATE_FONT_SIZE, color="dimgray")

    if title:
        fig.suptitle(title, fontsize=20, y=0.95)

    fig.savefig(filename)
    plt.close(fig)
    log.info("Saved grid drawing to %s", filename)
    return filename
