# ---------- Render parameters ----------
from dataclasses import dataclass
from typing import Optional

from rich.errors import StyleSyntaxError
from rich.style import Style

from .errors import InvalidInput

DEFAULT_BUFFER = 10
DEFAULT_FRAME_DELAY_MS = 100
DEFAULT_LOOP_DELAY_MS = 2000


@dataclass(frozen=True)
class RenderParameters:
    # Spacing
    buffer_preference: int = DEFAULT_BUFFER
    # Timing
    frame_delay_ms: int = DEFAULT_FRAME_DELAY_MS
    loop_delay_ms: int = DEFAULT_LOOP_DELAY_MS
    # Window (None = current terminal width / image height + 2)
    requested_width: Optional[int] = None
    requested_height: Optional[int] = None
    # Console behaviour
    disable_input_capture: bool = False
    always_on_top: bool = False
    # Look
    style: Optional[str] = None

    def validate(self) -> "RenderParameters":
        if self.buffer_preference < 0:
            raise InvalidInput(f"buffer must be >= 0, got {self.buffer_preference}")
        for name in ("frame_delay_ms", "loop_delay_ms"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidInput(f"{name} must be > 0, got {value}")
        for name in ("requested_width", "requested_height"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise InvalidInput(f"{name} must be > 0, got {value}")
        if self.style:
            try:
                Style.parse(self.style)
            except StyleSyntaxError as e:
                raise InvalidInput(f"bad style {self.style!r}: {e}") from e
        return self

    @classmethod
    def from_args(cls, args) -> "RenderParameters":
        return cls(
            buffer_preference=args.buffer,
            frame_delay_ms=args.frame_delay,
            loop_delay_ms=args.loop_delay,
            requested_width=args.width,
            requested_height=args.height,
            disable_input_capture=args.disable_input_capture,
            always_on_top=args.always_on_top,
            style=args.style,
        ).validate()
