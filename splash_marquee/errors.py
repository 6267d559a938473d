"""Exceptions raised by splash_marquee."""


class MarqueeError(Exception):
    """Base class for all marquee failures."""


class InvalidInput(MarqueeError, ValueError):
    """Bad art or parameters; raised before the render loop starts."""


class TerminalUnavailable(MarqueeError, RuntimeError):
    """Output is not an interactive console, or a console call failed."""
