import pytest

from splash_marquee.terminal import Terminal


class FakeTerminal(Terminal):
    """In-memory screen: a dict of row -> text plus a call log."""

    def __init__(self, width=20, height=6):
        self.width, self.height = width, height
        self.row = 0
        self.col = 0
        self.screen = {}
        self.lines = []
        self.calls = []
        self.cursor_visible = True

    def _put(self, text):
        cur = self.screen.get(self.row, "").ljust(self.col)
        self.screen[self.row] = cur[:self.col] + text + cur[self.col + len(text):]

    def get_size(self):
        return self.width, self.height

    def set_size(self, width, height):
        self.calls.append(("set_size", width, height))
        self.width, self.height = width, height

    def clear(self):
        self.calls.append(("clear",))
        self.screen = {}
        self.row = self.col = 0

    def write_line(self, text):
        self._put(text)
        self.lines.append(text)
        self.row += 1
        self.col = 0

    def write(self, text):
        self._put(text)
        self.col += len(text)

    def set_cursor(self, x, y):
        self.col, self.row = x, y

    def get_cursor_row(self):
        return self.row

    def set_cursor_visible(self, visible):
        self.cursor_visible = visible

    def disable_input_capture(self):
        self.calls.append(("disable_input_capture",))

    def set_always_on_top(self):
        self.calls.append(("set_always_on_top",))

    def rows(self, n):
        return [self.screen.get(r, "") for r in range(n)]


@pytest.fixture
def term():
    return FakeTerminal()


@pytest.fixture
def no_sleep():
    slept = []
    return slept.append
