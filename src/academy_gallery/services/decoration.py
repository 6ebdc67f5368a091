"""9-slice frame and caption compositing for gallery images.

The frame template is split into four fixed-size corners and four
stretchable edges. Corners are copied at their native size, the top and
bottom edges are stretched horizontally and the left and right edges
vertically so the ring exactly covers the border of the photograph. The
centre of the template is never drawn: the photo stays fully visible.
A semi-transparent caption (the gallery date) is composited last, in the
bottom-right corner, on its own layer.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from academy_gallery.domain.errors import InvalidFrame, InvalidGeometry, InvalidImage
from academy_gallery.domain.models import FrameBorders

logger = logging.getLogger(__name__)

CAPTION_FONT_SIZE = 24
CAPTION_FILL = (255, 255, 255, 102)
CAPTION_RIGHT_MARGIN = 20
CAPTION_BASELINE_MARGIN = 10

_DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError)


@dataclass(frozen=True)
class Slice:
    """Source rectangle in the template and its destination in the output."""

    name: str
    src_left: int
    src_top: int
    src_width: int
    src_height: int
    dest_left: int
    dest_top: int
    dest_width: int
    dest_height: int

    @property
    def src_box(self) -> tuple[int, int, int, int]:
        return (
            self.src_left,
            self.src_top,
            self.src_left + self.src_width,
            self.src_top + self.src_height,
        )


def compute_slices(
    frame_size: tuple[int, int],
    target_size: tuple[int, int],
    borders: FrameBorders,
) -> list[Slice]:
    """Return the eight border slices in composition order.

    Raises InvalidGeometry when the borders leave no stretchable centre in
    either the template or the target.
    """
    frame_width, frame_height = frame_size
    width, height = target_size
    top, right, bottom, left = borders.top, borders.right, borders.bottom, borders.left

    center_src_width = frame_width - left - right
    center_src_height = frame_height - top - bottom
    center_dest_width = width - left - right
    center_dest_height = height - top - bottom
    if min(center_src_width, center_src_height, center_dest_width, center_dest_height) <= 0:
        raise InvalidGeometry()

    return [
        Slice("top_left", 0, 0, left, top, 0, 0, left, top),
        Slice("top", left, 0, center_src_width, top, left, 0, center_dest_width, top),
        Slice("top_right", frame_width - right, 0, right, top, width - right, 0, right, top),
        Slice(
            "left", 0, top, left, center_src_height, 0, top, left, center_dest_height
        ),
        Slice(
            "right",
            frame_width - right,
            top,
            right,
            center_src_height,
            width - right,
            top,
            right,
            center_dest_height,
        ),
        Slice(
            "bottom_left", 0, frame_height - bottom, left, bottom, 0, height - bottom, left, bottom
        ),
        Slice(
            "bottom",
            left,
            frame_height - bottom,
            center_src_width,
            bottom,
            left,
            height - bottom,
            center_dest_width,
            bottom,
        ),
        Slice(
            "bottom_right",
            frame_width - right,
            frame_height - bottom,
            right,
            bottom,
            width - right,
            height - bottom,
            right,
            bottom,
        ),
    ]


@dataclass(frozen=True)
class DecorationEngine:
    """Frames and captions gallery photos at their native resolution."""

    frame: Image.Image
    borders: FrameBorders

    @classmethod
    def load(cls, frame_path: Path, borders: FrameBorders) -> "DecorationEngine":
        """Load and validate the frame template once, failing loudly."""
        try:
            with Image.open(frame_path) as raw:
                frame = raw.convert("RGBA")
        except FileNotFoundError as exc:
            raise InvalidFrame(f"Frame template not found: {frame_path.name}") from exc
        except _DECODE_ERRORS as exc:
            raise InvalidFrame() from exc
        if not frame.width or not frame.height:
            raise InvalidFrame()
        if (
            frame.width - borders.left - borders.right <= 0
            or frame.height - borders.top - borders.bottom <= 0
        ):
            raise InvalidGeometry("Frame borders exceed the template size")
        return cls(frame=frame, borders=borders)

    def decorate(self, base_path: Path, caption: str | None = None) -> bytes:
        """Return a PNG of the framed and captioned image, same size as the source."""
        try:
            with Image.open(base_path) as raw:
                base = raw.convert("RGBA")
        except _DECODE_ERRORS as exc:
            raise InvalidImage() from exc
        if not base.width or not base.height:
            raise InvalidImage()

        for piece in compute_slices(self.frame.size, base.size, self.borders):
            overlay = self.frame.crop(piece.src_box)
            if overlay.size != (piece.dest_width, piece.dest_height):
                overlay = overlay.resize(
                    (piece.dest_width, piece.dest_height), Image.Resampling.LANCZOS
                )
            base.alpha_composite(overlay, (piece.dest_left, piece.dest_top))

        text = (caption or "").strip()
        if text:
            base.alpha_composite(_caption_layer(base.size, text))

        buffer = io.BytesIO()
        base.save(buffer, format="PNG")
        return buffer.getvalue()


def _caption_layer(size: tuple[int, int], text: str) -> Image.Image:
    width, height = size
    layer = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    font = ImageFont.load_default(size=CAPTION_FONT_SIZE)
    draw.text(
        (width - CAPTION_RIGHT_MARGIN, height - CAPTION_BASELINE_MARGIN),
        text,
        font=font,
        fill=CAPTION_FILL,
        anchor="rs",
    )
    return layer
