import pytest

from splash_marquee.art import SplashImage
from splash_marquee.config import RenderParameters
from splash_marquee.scroller import (
    CLEAR_MARGIN,
    Scroller,
    buffer_width,
    build_frame,
    build_line,
    cycle_length,
    out_height,
    run_marquee,
    safe_slice,
)

AB = SplashImage(("AB", "CD"))


def test_safe_slice_bounds():
    assert safe_slice("hello", 0) == "hello"
    assert safe_slice("hello", 3) == "lo"
    assert safe_slice("hello", 5) == ""
    assert safe_slice("hello", 50) == ""
    assert safe_slice("hello", -1) == ""
    assert safe_slice("", 0) == ""


def test_buffer_width_scenario():
    assert buffer_width(3, 10, 2) == 8
    assert buffer_width(10, 10, 2) == 10
    assert buffer_width(0, 2, 2) == 0


@pytest.mark.parametrize("pref", [0, 1, 5, 10])
@pytest.mark.parametrize("host", [-3, 0, 1, 4, 20, 80])
def test_buffer_width_invariant(pref, host):
    b = buffer_width(pref, host, 7)
    assert b >= pref
    assert b >= host - 7


def test_out_height():
    assert out_height(6, 30) == 6
    assert out_height(6, 3) == 3
    assert out_height(6, -1) == 0


def test_first_frame_line_scenario():
    assert build_line("AB", 2, 8, 0, 10) == "AB        "
    assert build_frame(AB, 8, 0, 10, 2) == ["AB        ", "CD        "]


def test_zero_buffer_tiles_without_looping_forever():
    assert build_line("AB", 2, 0, 0, 2) == "AB"
    assert build_line("AB", 2, 0, 1, 2) == "BA"
    assert build_line("AB", 2, 0, 0, 5) == "ABABA"


def test_ragged_line_is_padded_to_splash_width():
    assert build_line("A", 3, 2, 0, 5) == "A    "
    assert build_line("A", 3, 2, 4, 6) == " A    "


def test_zero_width_image_line_is_blank():
    assert build_line("", 0, 0, 0, 5) == "     "
    assert build_line("", 0, 0, 3, 0) == ""


@pytest.mark.parametrize("host", [0, 1, 2, 3, 9, 10, 11, 37])
def test_line_length_equals_viewport(host):
    cycle = cycle_length(AB.width, 4)
    for i in range(cycle + 3):
        for line in AB.lines:
            assert len(build_line(line, AB.width, 4, i, host)) == host


def test_negative_viewport_gives_empty_line():
    assert build_line("AB", 2, 3, 0, -4) == ""


def test_offset_matches_infinite_tiling():
    img = SplashImage(("/\\_/\\", "( o.o )", " > ^ <"))
    buffer = 5
    cycle = cycle_length(img.width, buffer)
    for line in img.lines:
        strip = line.ljust(img.width + buffer) * 4
        for i in range(cycle):
            assert build_line(line, img.width, buffer, i, 30) == strip[i:i + 30]


def test_offset_past_padded_line_restarts_tiling():
    # padded line is "AB   " (5 chars); an offset beyond it slices to nothing
    assert build_line("AB", 2, 3, 7, 5) == "AB   "


def test_content_shifts_left_each_offset():
    assert build_line("AB", 2, 3, 0, 5) == "AB   "
    assert build_line("AB", 2, 3, 1, 5) == "B   A"
    assert build_line("AB", 2, 3, 4, 5) == " AB  "


# ---------- Scroller against a fake console ----------
def test_setup_resizes_before_computing_buffer(term, no_sleep):
    s = Scroller(AB, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=no_sleep)
    s.setup()
    assert ("set_size", 10, 4) in term.calls
    assert s.buffer == 8


def test_setup_defaults_to_current_width_and_image_height_plus_two(term, no_sleep):
    term.width = 33
    s = Scroller(AB, RenderParameters(), term, sleep=no_sleep)
    s.setup()
    assert ("set_size", 33, AB.height + 2) in term.calls


def test_setup_applies_console_flags(term, no_sleep):
    params = RenderParameters(disable_input_capture=True, always_on_top=True)
    Scroller(AB, params, term, sleep=no_sleep).setup()
    assert ("disable_input_capture",) in term.calls
    assert ("set_always_on_top",) in term.calls


def test_setup_skips_console_flags_by_default(term, no_sleep):
    Scroller(AB, RenderParameters(), term, sleep=no_sleep).setup()
    assert ("disable_input_capture",) not in term.calls
    assert ("set_always_on_top",) not in term.calls


def test_one_pass_renders_every_offset(term):
    slept = []
    s = Scroller(AB, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=slept.append)
    assert s.run(max_passes=1) == 1
    assert s.frames == 10
    assert term.lines[:2] == ["AB        ", "CD        "]
    assert term.lines[2:4] == ["B        A", "D        C"]
    assert all(len(line) == 10 for line in term.lines)
    # ten frame delays then the loop delay
    assert slept == [0.1] * 10 + [2.0]


def test_pass_ends_with_blank_screen_and_hidden_cursor(term, no_sleep):
    s = Scroller(AB, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=no_sleep)
    s.run(max_passes=1)
    assert all(not row.strip() for row in term.screen.values())
    assert term.row == 0
    assert term.cursor_visible is False


def test_frames_redraw_in_place(term, no_sleep):
    s = Scroller(AB, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=no_sleep)
    s.setup()
    s.render_frame(0)
    s.clear_frame()
    s.render_frame(1)
    assert term.rows(2) == ["B        A", "D        C"]


def test_clear_blanks_frame_plus_margin(term, no_sleep):
    s = Scroller(AB, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=no_sleep)
    s.setup()
    s.render_frame(0)
    s.clear_frame()
    assert term.rows(AB.height + CLEAR_MARGIN) == [" " * 10] * 4
    assert term.row == 0


def test_clear_then_rerender_is_identical(term, no_sleep):
    s = Scroller(AB, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=no_sleep)
    s.setup()
    first = s.render_frame(3)
    screen = dict(term.screen)
    s.clear_frame()
    assert s.render_frame(3) == first
    assert term.rows(2) == [screen[0], screen[1]]


def test_live_resize_is_picked_up_next_frame(term):
    img = SplashImage(("AB", "CD"))

    def shrink(_secs):
        term.width = 6

    s = Scroller(img, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=shrink)
    s.setup()
    s.render_frame(0)
    s._pause(100)
    lines = s.render_frame(0)
    assert lines == ["AB    ", "CD    "]
    assert s.buffer == 4


def test_short_viewport_limits_rows(term, no_sleep):
    s = Scroller(SplashImage(("1", "2", "3", "4")), RenderParameters(requested_width=5, requested_height=6), term, sleep=no_sleep)
    s.setup()
    term.height = 2
    assert s.render_frame(0) == ["1    ", "2    "]
    assert s.out_height == 2


def test_stop_ends_loop(term):
    s = None

    def stop_after_three(_secs):
        if s.frames >= 3:
            s.stop()

    s = Scroller(AB, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=stop_after_three)
    s.run()
    assert s.frames == 3
    assert s.stopped


def test_stop_event_interrupts_default_sleep(term):
    s = Scroller(AB, RenderParameters(loop_delay_ms=60_000), term)
    s.stop()
    # returns immediately because the stop event is already set
    s._pause(60_000)
    assert s.run() == 0


def test_zero_width_cycle_does_not_spin(term, no_sleep):
    s = Scroller(SplashImage(("", "")), RenderParameters(buffer_preference=0, requested_width=1, requested_height=4), term, sleep=no_sleep)
    # width 1 forces buffer 1, one frame per pass
    assert s.run(max_passes=2) == 2
    assert s.frames == 2


def test_run_marquee_restores_cursor(term, no_sleep):
    run_marquee(AB, RenderParameters(buffer_preference=0, requested_width=2, requested_height=4), term, max_passes=1)
    assert term.cursor_visible is True


def test_passes_repeat_identically(term, no_sleep):
    s = Scroller(AB, RenderParameters(buffer_preference=3, requested_width=10, requested_height=4), term, sleep=no_sleep)
    s.run(max_passes=2)
    assert len(term.lines) == 40
    assert term.lines[:20] == term.lines[20:]
