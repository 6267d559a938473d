# ---------- Console access ----------
# Everything the scroller needs from the console lives behind Terminal so the
# render loop can be driven against a fake screen in tests.

import ctypes
import logging
import os
import sys
from typing import Optional, Tuple

from rich.console import Console
from rich.text import Text

from .errors import TerminalUnavailable

log = logging.getLogger(__name__)

# ---------- ANSI helpers ----------
RESET = "\x1b[0m"
HIDE = "\x1b[?25l"; SHOW = "\x1b[?25h"
def goto(r, c=1): return f"\x1b[{r};{c}H"
def resize_seq(w, h): return f"\x1b[8;{h};{w}t"

# ---------- Win32 console constants ----------
STD_INPUT_HANDLE = -10
STD_OUTPUT_HANDLE = -11
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
ENABLE_QUICK_EDIT_MODE = 0x0040
ENABLE_EXTENDED_FLAGS = 0x0080
HWND_TOPMOST = -1
SWP_NOSIZE = 0x0001
SWP_NOMOVE = 0x0002


def enable_vt_mode() -> None:
    """Let the Windows console interpret ANSI escapes; no-op elsewhere."""
    if os.name != "nt":
        return
    kernel32 = ctypes.windll.kernel32
    h = kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
    mode = ctypes.c_uint32()
    if kernel32.GetConsoleMode(h, ctypes.byref(mode)):
        kernel32.SetConsoleMode(h, mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING)


class Terminal:
    """Console capability used by the scroller.

    Rows and columns are 0-based. ``write_line`` ends the line and moves the
    cursor to column 0 of the next row; ``write`` leaves the cursor after the
    text.
    """

    def get_size(self) -> Tuple[int, int]:
        raise NotImplementedError

    def set_size(self, width: int, height: int) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def write_line(self, text: str) -> None:
        raise NotImplementedError

    def write(self, text: str) -> None:
        raise NotImplementedError

    def set_cursor(self, x: int, y: int) -> None:
        raise NotImplementedError

    def get_cursor_row(self) -> int:
        raise NotImplementedError

    def set_cursor_visible(self, visible: bool) -> None:
        raise NotImplementedError

    def disable_input_capture(self) -> None:
        pass

    def set_always_on_top(self) -> None:
        pass

    def restore(self) -> None:
        self.set_cursor_visible(True)


class ConsoleTerminal(Terminal):
    """The real console, via rich for sizing/styling and raw ANSI for the cursor.

    The cursor row is tracked rather than queried: the scroller is the only
    writer, and rows are pinned to the last visible row once output reaches
    the bottom of the window, the same way the console scrolls.
    """

    def __init__(self, console: Optional[Console] = None, style: Optional[str] = None):
        self.console = console or Console(highlight=False, soft_wrap=False)
        if not self.console.is_terminal:
            raise TerminalUnavailable("output is not an interactive terminal")
        self.style = style or ""
        self._row = 0
        enable_vt_mode()

    def _out(self, seq: str) -> None:
        try:
            self.console.file.write(seq)
            self.console.file.flush()
        except OSError as e:
            raise TerminalUnavailable(f"console write failed: {e}") from e

    def get_size(self) -> Tuple[int, int]:
        size = self.console.size
        return size.width, size.height

    def set_size(self, width: int, height: int) -> None:
        log.info("resizing console to %dx%d", width, height)
        if os.name == "nt":
            # sets both the screen buffer and the window
            rc = os.system(f"mode con: cols={width} lines={height}")
            if rc != 0:
                raise TerminalUnavailable(f"mode con failed with status {rc}")
        else:
            # xterm window op; terminals that ignore it keep their size
            self._out(resize_seq(width, height))

    def clear(self) -> None:
        self._out("\x1b[2J" + goto(1, 1))
        self._row = 0

    def write_line(self, text: str) -> None:
        self.console.print(Text(text, style=self.style), end="\n", overflow="crop", no_wrap=True)
        _, height = self.get_size()
        self._row = min(self._row + 1, max(0, height - 1))

    def write(self, text: str) -> None:
        self._out(text)

    def set_cursor(self, x: int, y: int) -> None:
        self._row = max(0, y)
        self._out(goto(self._row + 1, max(0, x) + 1))

    def get_cursor_row(self) -> int:
        return self._row

    def set_cursor_visible(self, visible: bool) -> None:
        self._out(SHOW if visible else HIDE)

    def disable_input_capture(self) -> None:
        if os.name == "nt":
            kernel32 = ctypes.windll.kernel32
            h = kernel32.GetStdHandle(STD_INPUT_HANDLE)
            mode = ctypes.c_uint32()
            if not kernel32.GetConsoleMode(h, ctypes.byref(mode)):
                raise TerminalUnavailable("cannot read console input mode")
            new_mode = (mode.value & ~ENABLE_QUICK_EDIT_MODE) | ENABLE_EXTENDED_FLAGS
            kernel32.SetConsoleMode(h, new_mode)
            log.info("quick-edit disabled")
        else:
            log.debug("no quick-edit mode on %s; hiding cursor only", sys.platform)
        self.set_cursor_visible(False)

    def set_always_on_top(self) -> None:
        if os.name != "nt":
            log.warning("always-on-top is only supported on Windows consoles")
            return
        hwnd = ctypes.windll.kernel32.GetConsoleWindow()
        if not hwnd:
            raise TerminalUnavailable("no console window to pin")
        ctypes.windll.user32.SetWindowPos(hwnd, HWND_TOPMOST, 0, 0, 0, 0, SWP_NOMOVE | SWP_NOSIZE)
        log.info("console pinned on top")

    def restore(self) -> None:
        self._out(RESET + SHOW)
