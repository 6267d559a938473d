# ---------- Scroll renderer ----------
# Frame math is plain functions over strings; Scroller drives them against a
# Terminal, one frame per horizontal offset, forever (or until stopped).

import logging
import threading
from typing import Callable, List, Optional

from .art import SplashImage
from .config import RenderParameters
from .terminal import Terminal

log = logging.getLogger(__name__)

# rows cleared below the frame, for leftovers of a taller previous frame
CLEAR_MARGIN = 2


# ---------- Frame math ----------
def safe_slice(text: str, start: int) -> str:
    """``text[start:]``, but empty instead of surprising for out-of-range starts."""
    if start < 0 or start >= len(text):
        return ""
    return text[start:]


def buffer_width(preference: int, host_width: int, splash_width: int) -> int:
    return max(preference, host_width - splash_width)


def out_height(splash_height: int, host_height: int) -> int:
    return max(0, min(splash_height, host_height))


def cycle_length(splash_width: int, buffer: int) -> int:
    return splash_width + buffer


def build_line(line: str, splash_width: int, buffer: int, offset: int, host_width: int) -> str:
    """One row of a frame, exactly ``host_width`` characters long.

    The row is the image line followed by ``buffer`` blanks, tiled end to end
    and read starting at ``offset``.
    """
    host_width = max(0, host_width)
    buffered = line + " " * buffer
    padded = buffered.ljust(splash_width + buffer)
    if not padded:
        return " " * host_width
    out = safe_slice(padded, offset)
    while len(out) <= host_width:
        out += padded
    if len(out) > host_width:
        out = out[:host_width]
    return out


def build_frame(image: SplashImage, buffer: int, offset: int, host_width: int, rows: int) -> List[str]:
    return [build_line(image.lines[j], image.width, buffer, offset, host_width) for j in range(rows)]


# ---------- Renderer ----------
class Scroller:
    def __init__(self, image: SplashImage, params: RenderParameters, terminal: Terminal,
                 sleep: Optional[Callable[[float], object]] = None):
        self.image = image
        self.params = params.validate()
        self.terminal = terminal
        self._stop = threading.Event()
        self._sleep = sleep or self._stop.wait
        self.host_width = 0
        self.host_height = 0
        self.buffer = params.buffer_preference
        # last frame's height; the between-pass clear reuses it
        self.out_height = 0
        self.frames = 0

    # ---- lifecycle ----
    def stop(self):
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def setup(self):
        p = self.params
        if p.disable_input_capture:
            self.terminal.disable_input_capture()
        if p.always_on_top:
            self.terminal.set_always_on_top()

        cur_w, _ = self.terminal.get_size()
        width = p.requested_width or cur_w
        height = p.requested_height or self.image.height + CLEAR_MARGIN
        self.terminal.set_size(width, height)
        self.terminal.clear()
        self.host_width, self.host_height = width, height
        self.buffer = buffer_width(p.buffer_preference, self.host_width, self.image.width)
        log.info("splash %dx%d, window %dx%d, buffer %d",
                 self.image.width, self.image.height, width, height, self.buffer)

    def run(self, max_passes: Optional[int] = None):
        """Scroll until stopped, or for ``max_passes`` passes when given."""
        self.setup()
        passes = 0
        while not self.stopped:
            self.scroll_pass()
            passes += 1
            if self.stopped:
                break
            self._pause(self.params.loop_delay_ms)
            self.clear_frame()
            if max_passes is not None and passes >= max_passes:
                break
        log.info("stopped after %d pass(es), %d frame(s)", passes, self.frames)
        return passes

    # ---- frames ----
    def refresh_viewport(self):
        w, h = self.terminal.get_size()
        if (w, h) != (self.host_width, self.host_height):
            log.debug("viewport %dx%d -> %dx%d", self.host_width, self.host_height, w, h)
        self.host_width, self.host_height = w, h
        self.buffer = buffer_width(self.params.buffer_preference, w, self.image.width)
        self.out_height = out_height(self.image.height, h)

    def render_frame(self, offset: int) -> List[str]:
        self.refresh_viewport()
        lines = build_frame(self.image, self.buffer, offset, self.host_width, self.out_height)
        for line in lines:
            self.terminal.write_line(line)
        self.frames += 1
        return lines

    def scroll_pass(self):
        i = 0
        while i < cycle_length(self.image.width, self.buffer) and not self.stopped:
            self.render_frame(i)
            self._pause(self.params.frame_delay_ms)
            last = i >= cycle_length(self.image.width, self.buffer) - 1
            if not last and not self.stopped:
                self.clear_frame()
            self.terminal.set_cursor_visible(False)
            i += 1

    def clear_frame(self):
        """Blank the last frame plus CLEAR_MARGIN rows and park the cursor on its top row."""
        top = max(0, self.terminal.get_cursor_row() - self.out_height)
        blank = " " * max(0, self.host_width)
        for k in range(self.out_height + CLEAR_MARGIN):
            self.terminal.set_cursor(0, top + k)
            self.terminal.write(blank)
        self.terminal.set_cursor(0, top)

    def _pause(self, ms: int):
        self._sleep(ms / 1000.0)


def run_marquee(image: SplashImage, params: RenderParameters, terminal: Terminal,
                max_passes: Optional[int] = None) -> int:
    scroller = Scroller(image, params, terminal)
    try:
        return scroller.run(max_passes=max_passes)
    finally:
        terminal.restore()
