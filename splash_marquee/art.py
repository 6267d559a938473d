# ---------- Splash art sources ----------
# The image every scroll pass animates, plus the ways to get one:
# built-in sample, plain text file, FIGlet text, raster image.

import os
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from pyfiglet import Figlet, FigletFont
from PIL import Image, UnidentifiedImageError
from rapidfuzz import process as rf_process

from .errors import InvalidInput

SAMPLE_ART = (
    r"  ____        _           _      ",
    r" / ___| _ __ | | __ _ ___| |__   ",
    r" \___ \| '_ \| |/ _` / __| '_ \  ",
    r"  ___) | |_) | | (_| \__ \ | | | ",
    r" |____/| .__/|_|\__,_|___/_| |_| ",
    r"       |_|                       ",
)

# ordered light->dark for ASCII image mapping
RAMP = " .:-=+*#%@"


@dataclass(frozen=True)
class SplashImage:
    lines: Tuple[str, ...]

    def __post_init__(self):
        if not self.lines:
            raise InvalidInput("splash image has no lines")

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "SplashImage":
        return cls(tuple(line.rstrip("\r\n") for line in lines))

    @property
    def width(self) -> int:
        return max(len(line) for line in self.lines)

    @property
    def height(self) -> int:
        return len(self.lines)


def sample_image() -> SplashImage:
    return SplashImage(SAMPLE_ART)


def load_art_file(path: str) -> SplashImage:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInput(f"cannot read art file {path}: {e}") from e
    lines = text.expandtabs().rstrip("\n").split("\n") if text.strip("\n") else []
    return SplashImage.from_lines(lines)


def fonts_list() -> List[str]:
    return sorted(FigletFont.getFonts())


def suggest_fonts(name: str, limit: int = 5) -> List[str]:
    return [m[0] for m in rf_process.extract(name, fonts_list(), limit=limit)]


def render_figlet(message: str, font: str = "standard", width: int = 200) -> SplashImage:
    """Render ``message`` with a FIGlet font.

    Unknown fonts raise InvalidInput naming the closest installed fonts.
    """
    if font not in FigletFont.getFonts():
        hint = ", ".join(suggest_fonts(font))
        raise InvalidInput(f"unknown FIGlet font {font!r} (did you mean: {hint})")
    f = Figlet(font=font, width=width, justify="left")
    art = f.renderText(message if message.strip() else " ")
    lines = art.rstrip("\n").split("\n")
    # pyfiglet pads every row to the same width; trailing blanks are noise
    while lines and not lines[-1].strip():
        lines.pop()
    return SplashImage.from_lines(line.rstrip() for line in lines)


def ascii_from_image(path: str, out_width: int = 120, charset: str = RAMP) -> SplashImage:
    if out_width <= 0:
        raise InvalidInput("image width must be positive")
    if not os.path.exists(path):
        raise InvalidInput(f"image not found: {path}")
    try:
        img = Image.open(path).convert("L")
    except (OSError, UnidentifiedImageError) as e:
        raise InvalidInput(f"cannot open image {path}: {e}") from e
    w, h = img.size
    aspect = 0.45  # char cell ratio
    new_w = out_width
    new_h = max(1, int(h * (new_w / w) * aspect))
    img = img.resize((new_w, new_h))
    px = img.load()
    n = len(charset) - 1
    lines = []
    for y in range(new_h):
        row = []
        for x in range(new_w):
            # dark pixels map to dense characters
            val = 1.0 - px[x, y] / 255.0
            row.append(charset[int(val * n)])
        lines.append("".join(row).rstrip())
    return SplashImage.from_lines(lines)
