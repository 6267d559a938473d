"""Command line entry point: pick the art, then scroll it (or export it)."""

from __future__ import annotations

import argparse
import logging

from rich.console import Console

from .art import ascii_from_image, load_art_file, render_figlet, sample_image
from .config import DEFAULT_BUFFER, DEFAULT_FRAME_DELAY_MS, DEFAULT_LOOP_DELAY_MS, RenderParameters
from .errors import InvalidInput, TerminalUnavailable
from .logging_setup import configure_logging

log = logging.getLogger(__name__)
err_console = Console(stderr=True, highlight=False)

EXIT_INVALID_INPUT = 2
EXIT_TERMINAL_UNAVAILABLE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="splash-marquee", description="Scroll ASCII art across the console")

    src = parser.add_mutually_exclusive_group()
    src.add_argument("--file", default=None, help="Plain text art file")
    src.add_argument("--text", default=None, help="Message rendered with a FIGlet font")
    src.add_argument("--image", default=None, help="Raster image converted to ASCII")
    parser.add_argument("--font", default="standard", help="FIGlet font for --text")
    parser.add_argument("--figlet-width", type=int, default=200, help="FIGlet layout width for --text")
    parser.add_argument("--image-width", type=int, default=120, help="Columns for --image")

    parser.add_argument("--buffer", type=int, default=DEFAULT_BUFFER, help="Minimum gap between copies")
    parser.add_argument("--frame-delay", type=int, default=DEFAULT_FRAME_DELAY_MS, help="Milliseconds per frame")
    parser.add_argument("--loop-delay", type=int, default=DEFAULT_LOOP_DELAY_MS, help="Milliseconds between passes")
    parser.add_argument("--width", type=int, default=None, help="Console width to set (default: current)")
    parser.add_argument("--height", type=int, default=None, help="Console height to set (default: art height + 2)")
    parser.add_argument("--disable-input-capture", action="store_true",
                        help="Turn off quick-edit so clicks do not pause output; hide the cursor")
    parser.add_argument("--always-on-top", action="store_true", help="Pin the console window above others")
    parser.add_argument("--style", default=None, help='Rich style for the art, e.g. "bold green"')

    parser.add_argument("--passes", type=int, default=None, help="Stop after N passes (default: never)")
    parser.add_argument("--export", default=None, help="Write one pass to a .gif instead of the console")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug (stderr)")
    parser.add_argument("--log-file", default=None, help="Also log to this file")
    return parser


def load_image(args: argparse.Namespace):
    if args.file:
        return load_art_file(args.file)
    if args.text is not None:
        return render_figlet(args.text, font=args.font, width=args.figlet_width)
    if args.image:
        return ascii_from_image(args.image, out_width=args.image_width)
    return sample_image()


def cmd_export(image, params: RenderParameters, path: str) -> int:
    from .export import export_animation

    count = export_animation(image, params, path)
    err_console.print(f"[green]Saved {path}[/green] ({count} frames)")
    return 0


def cmd_run(image, params: RenderParameters, passes: int | None) -> int:
    from .scroller import run_marquee
    from .terminal import ConsoleTerminal

    terminal = ConsoleTerminal(style=params.style)
    run_marquee(image, params, terminal, max_passes=passes)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    try:
        if args.passes is not None and args.passes <= 0:
            raise InvalidInput(f"passes must be > 0, got {args.passes}")
        params = RenderParameters.from_args(args)
        image = load_image(args)
        log.info("loaded art: %d line(s), %d column(s)", image.height, image.width)
        if args.export:
            return cmd_export(image, params, args.export)
        return cmd_run(image, params, args.passes)
    except InvalidInput as e:
        err_console.print(f"[red]Invalid input:[/red] {e}")
        return EXIT_INVALID_INPUT
    except TerminalUnavailable as e:
        err_console.print(f"[red]Terminal unavailable:[/red] {e}")
        return EXIT_TERMINAL_UNAVAILABLE
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
