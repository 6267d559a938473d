"""Scroll ASCII-art splash images across the console as a looping marquee."""

from .art import SplashImage, ascii_from_image, load_art_file, render_figlet, sample_image
from .config import RenderParameters
from .errors import InvalidInput, MarqueeError, TerminalUnavailable
from .scroller import Scroller, build_line, buffer_width, run_marquee, safe_slice
from .terminal import ConsoleTerminal, Terminal

__all__ = [
    "ConsoleTerminal",
    "InvalidInput",
    "MarqueeError",
    "RenderParameters",
    "Scroller",
    "SplashImage",
    "Terminal",
    "TerminalUnavailable",
    "ascii_from_image",
    "buffer_width",
    "build_line",
    "load_art_file",
    "render_figlet",
    "run_marquee",
    "safe_slice",
    "sample_image",
]

__version__ = "0.1.0"
