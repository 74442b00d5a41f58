"""Overlay placement computations.

Both placements are pure: they read only their inputs and return a
``PopupGeometry`` tagged ``"calculated"``. Rows and columns are relative to the
geometry's anchor window, which is the host window for the first overlay and
the parent overlay for stacked ones.
"""

from __future__ import annotations

import logging
import math

from peekstack.api.geometry import (
    PopupGeometry,
    RootPlacement,
    RootSizing,
    StackedPlacement,
    StackedSizing,
)

logger = logging.getLogger(__name__)

BORDER_OVERHEAD = 2


def border_overhead(border_enabled: bool) -> int:
    """Return rows/columns taken by the border around a window."""
    return BORDER_OVERHEAD if border_enabled else 0


def place_root_overlay(placement: RootPlacement, sizing: RootSizing) -> PopupGeometry:
    """Place the first overlay next to the cursor of the anchor window.

    The overlay goes above the cursor when the space above exceeds half of
    the usable window height, below otherwise. Configured minimum sizes win
    over what fits on the chosen side.
    """
    anchor = placement.anchor
    cursor_row = placement.cursor.row - anchor.row
    cursor_col = placement.cursor.col - anchor.col

    usable_height = anchor.height - (1 if placement.decoration_bar else 0)
    usable_width = anchor.width

    space_above = max(0, cursor_row - 1)
    space_below = max(0, usable_height - cursor_row - 1)
    place_above = space_above > usable_height / 2

    overhead = border_overhead(sizing.border_enabled)
    fittable = (space_above if place_above else space_below) - overhead

    target_height = min(math.floor(usable_height * sizing.size_ratio), fittable)
    target_width = math.floor(usable_width * sizing.size_ratio)
    height = max(sizing.min_height, target_height)
    width = max(sizing.min_width, target_width)

    if place_above:
        row = max(0, space_above - height - overhead - sizing.row_offset)
    else:
        row = space_above + 1 + sizing.row_offset
    col = cursor_col + sizing.col_offset

    logger.debug(
        "root overlay placement anchor=%s side=%s size=%sx%s at=(%s,%s) above=%s below=%s",
        placement.anchor_window_id,
        "above" if place_above else "below",
        width,
        height,
        row,
        col,
        space_above,
        space_below,
    )
    return PopupGeometry(
        width=width,
        height=height,
        row=row,
        col=col,
        z_index=sizing.z_index_base,
        anchor_window_id=placement.anchor_window_id,
    )


def place_stacked_overlay(placement: StackedPlacement, sizing: StackedSizing) -> PopupGeometry:
    """Place an overlay on top of its parent overlay, shrunk and offset by one level."""
    parent = placement.parent
    width = max(sizing.min_width, parent.width - sizing.width_decrement)
    height = max(sizing.min_height, parent.height - sizing.height_decrement)
    row = sizing.stack_row_offset - (1 if placement.parent_decoration_bar else 0)
    col = sizing.stack_col_offset
    # Closed middle overlays leave gaps; a child always sits above its parent.
    z_index = max(sizing.z_index_base + placement.depth, parent.z_index + 1)

    logger.debug(
        "stacked overlay placement parent=%s depth=%s size=%sx%s z=%s",
        parent.window_id,
        placement.depth,
        width,
        height,
        z_index,
    )
    return PopupGeometry(
        width=width,
        height=height,
        row=row,
        col=col,
        z_index=z_index,
        anchor_window_id=parent.window_id,
    )
