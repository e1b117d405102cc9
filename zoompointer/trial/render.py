from __future__ import annotations
import logging
from typing import Optional, Tuple
from PIL import Image, ImageDraw

from .config import cfg
from .geometry import Rect, grid_cells
from .session import Session
from .simulation import Phase

CANVAS_SIZE: Tuple[int, int] = (cfg.CANVAS_WIDTH, cfg.CANVAS_HEIGHT)
COLORS = cfg.COLORS


def placeholder_image(session: Session) -> Image.Image:
    """Flat stand-in for the experiment image, sized to the full dimensions."""
    dims = session.state.full_dimensions
    return Image.new("RGB", (int(dims.w), int(dims.h)), COLORS["placeholder"][:3])


def _draw_centered_text(draw, canvas_size, message: str, fill) -> None:
    """Draw a multi-line message centered on the canvas."""
    lines = message.split("\n")
    line_height = 18
    width, height = canvas_size
    y = height / 2 - (len(lines) - 1) * line_height / 2
    for line in lines:
        left, top, right, bottom = draw.textbbox((0, 0), line)
        draw.text(
            (width / 2 - (right - left) / 2, y - (bottom - top) / 2), line, fill=fill
        )
        y += line_height


def _draw_pointer(draw, cx: float, cy: float) -> None:
    r = cfg.POINTER_RADIUS
    draw.ellipse(
        [cx - r, cy - r, cx + r, cy + r],
        fill=COLORS["pointer"],
        outline=(0, 0, 0, 255),
        width=2,
    )


def _scaled_rect(rect: Rect, origin_x, origin_y, scale_x, scale_y):
    """Map an image-space rect into canvas coordinates as [x0, y0, x1, y1]."""
    x0 = (rect.x - origin_x) * scale_x
    y0 = (rect.y - origin_y) * scale_y
    return [x0, y0, x0 + rect.w * scale_x, y0 + rect.h * scale_y]


def render_bottom_panel(
    session: Session,
    image: Image.Image,
    canvas_size: Tuple[int, int] = CANVAS_SIZE,
) -> Image.Image:
    """Full image with the target box, current-view outline and pointer."""
    state = session.state
    canvas = image.convert("RGB").resize(canvas_size)
    draw = ImageDraw.Draw(canvas, "RGBA")
    scale_x = canvas_size[0] / state.full_dimensions.w
    scale_y = canvas_size[1] / state.full_dimensions.h

    draw.rectangle(
        _scaled_rect(state.target_box, 0.0, 0.0, scale_x, scale_y),
        outline=COLORS["target_box"],
        width=3,
    )
    if state.phase is not Phase.IDLE:
        draw.rectangle(
            _scaled_rect(state.current_view, 0.0, 0.0, scale_x, scale_y),
            outline=COLORS["view_outline"],
            width=2,
        )
    pointer = state.pointer
    _draw_pointer(draw, pointer.x * scale_x, pointer.y * scale_y)
    return canvas


def render_top_panel(
    session: Session,
    image: Image.Image,
    canvas_size: Tuple[int, int] = CANVAS_SIZE,
) -> Image.Image:
    """Zoomed view with grid, key labels and target, or a phase message."""
    state = session.state
    width, height = canvas_size
    phase = state.phase

    if phase is Phase.IDLE:
        canvas = Image.new("RGB", canvas_size, COLORS["idle_background"][:3])
        draw = ImageDraw.Draw(canvas, "RGBA")
        _draw_centered_text(draw, canvas_size, "hit space to start", COLORS["text"])
        return canvas

    if phase is Phase.FINISHED:
        canvas = Image.new("RGB", canvas_size, COLORS["idle_background"][:3])
        draw = ImageDraw.Draw(canvas, "RGBA")
        message = (
            f"The pointer moved {state.percentage_moved:.2f}% of the image diagonal "
            f"and took {state.moves} moves.\n\npress space to start another trial."
        )
        _draw_centered_text(draw, canvas_size, message, COLORS["text"])
        return canvas

    if phase is not Phase.RUNNING:
        raise AssertionError(f"unhandled phase {phase!r}")

    view = state.current_view
    canvas = image.convert("RGB").transform(
        canvas_size,
        Image.Transform.EXTENT,
        (view.x, view.y, view.x + view.w, view.y + view.h),
        resample=Image.Resampling.BILINEAR,
    )
    draw = ImageDraw.Draw(canvas, "RGBA")

    canvas_view = Rect(0.0, 0.0, float(width), float(height))
    for cell in grid_cells(canvas_view, state.cols, state.rows):
        box = [cell.x, cell.y, cell.x + cell.w, cell.y + cell.h]
        highlighted = session.highlighted_cell == cell.index
        if highlighted:
            draw.rectangle(box, fill=COLORS["grid_highlight"])
        draw.rectangle(box, outline=COLORS["grid"], width=1)
        key = session.key_for_cell(cell.index)
        if key:
            label = key.upper()
            left, top, right, bottom = draw.textbbox((0, 0), label)
            draw.text(
                (
                    cell.x + cell.w / 2 - (right - left) / 2,
                    cell.y + cell.h / 2 - (bottom - top) / 2,
                ),
                label,
                fill=COLORS["text_highlight"] if highlighted else COLORS["text"],
            )

    draw.rectangle(
        _scaled_rect(state.target_box, view.x, view.y, width / view.w, height / view.h),
        outline=COLORS["target_box"],
        width=3,
    )
    _draw_pointer(draw, width / 2, height / 2)
    return canvas


def render_frame(
    session: Session,
    image: Optional[Image.Image] = None,
    canvas_size: Tuple[int, int] = CANVAS_SIZE,
) -> Image.Image:
    """Top panel stacked over the bottom panel, like the on-screen layout."""
    if image is None:
        image = placeholder_image(session)
    top = render_top_panel(session, image, canvas_size)
    bottom = render_bottom_panel(session, image, canvas_size)
    frame = Image.new("RGB", (canvas_size[0], canvas_size[1] * 2))
    frame.paste(top, (0, 0))
    frame.paste(bottom, (0, canvas_size[1]))
    return frame


def save_frame(
    session: Session,
    outfile: str = "zoompointer_frame.jpg",
    image: Optional[Image.Image] = None,
    canvas_size: Tuple[int, int] = CANVAS_SIZE,
) -> str:
    """Render the current frame into a JPEG and return its path."""
    frame = render_frame(session, image, canvas_size)
    frame.save(outfile, format="JPEG", quality=cfg.JPEG_QUALITY, optimize=True)
    logging.getLogger(__name__).debug(
        "Frame saved to %s (phase=%s, moves=%d)",
        outfile,
        session.state.phase.value,
        session.state.moves,
    )
    return outfile
