# ---------- Export ----------
# Off-screen recording of one scroll pass to an animated GIF.
import logging
import os
from typing import List, Optional, Tuple

import imageio.v3 as iio
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .art import SplashImage
from .config import RenderParameters
from .errors import InvalidInput
from .scroller import CLEAR_MARGIN, buffer_width, build_frame, cycle_length, out_height

log = logging.getLogger(__name__)

FG = (0, 255, 120)
BG = (0, 0, 0)


def find_mono_font(size: int = 18):
    candidates = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
        "/Library/Fonts/Menlo.ttc",
        "C:\\Windows\\Fonts\\consola.ttf",
    ]
    for p in candidates:
        if os.path.exists(p):
            try: return ImageFont.truetype(p, size)
            except OSError: pass
    return ImageFont.load_default()


def cell_size(font) -> Tuple[int, int]:
    bbox = font.getbbox("M")
    return max(1, bbox[2] - bbox[0]), max(1, bbox[3] - bbox[1])


def record_pass(image: SplashImage, width: int, height: int, buffer_preference: int) -> List[List[str]]:
    """Every frame of one scroll pass at a fixed ``width`` x ``height`` viewport."""
    buffer = buffer_width(buffer_preference, width, image.width)
    rows = out_height(image.height, height)
    return [build_frame(image, buffer, i, width, rows) for i in range(cycle_length(image.width, buffer))]


def render_frame_to_image(block: List[str], width: int, font, fg=FG, bg=BG) -> Image.Image:
    cell_w, cell_h = cell_size(font)
    img = Image.new("RGB", (max(1, width * cell_w), max(1, len(block) * cell_h)), bg)
    draw = ImageDraw.Draw(img)
    for y, line in enumerate(block):
        for x, ch in enumerate(line):
            if ch == " ": continue
            draw.text((x * cell_w, y * cell_h), ch, fill=fg, font=font)
    return img


def export_animation(image: SplashImage, params: RenderParameters, path: str,
                     width: Optional[int] = None, font=None) -> int:
    """Write one pass as a looping GIF; returns the number of frames written."""
    if os.path.splitext(path)[1].lower() != ".gif":
        raise InvalidInput(f"only .gif export is supported, got {path}")
    width = width or params.requested_width or image.width + params.buffer_preference
    height = params.requested_height or image.height + CLEAR_MARGIN
    frames = record_pass(image, width, height, params.buffer_preference)
    if not frames:
        raise InvalidInput("nothing to export: image and buffer are both zero-width")
    font = font or find_mono_font()
    arrays = [np.asarray(render_frame_to_image(f, width, font)) for f in frames]
    # hold the last frame for the pause between passes
    durations = [params.frame_delay_ms] * (len(arrays) - 1) + [params.loop_delay_ms]
    log.info("exporting %d frames at %dx%d to %s", len(arrays), width, height, path)
    iio.imwrite(path, np.stack(arrays), extension=".gif", duration=durations, loop=0)
    return len(arrays)
