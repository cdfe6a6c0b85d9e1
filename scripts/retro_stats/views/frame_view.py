#------------------------------------------------------------
#                        frame_view.py
#        Turns panel lines into a stream of "typing" frames
#                  with per-frame display delays.

import math
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple
from PIL import Image, ImageDraw, ImageFont
from ..config import (
    BACKGROUND_COLOR,
    CHAR_DELAY_MS,
    END_HOLD_MS,
    FIRST_LINE_Y,
    FONT_PATHS,
    FONT_SIZE,
    FOREGROUND_COLOR,
    LINE_DURATION_MS,
    LINE_PAUSE_FRAMES,
    LINE_PAUSE_MS,
    LINE_SPACING,
    PACING_LINE,
)

TypingState = Tuple[Tuple[str, ...], int]


@dataclass(frozen=True)
class FixedCharacterPacing:
    """Every character waits the same time; pauses repeat the last frame."""

    char_delay_ms: int = CHAR_DELAY_MS
    line_pause_frames: int = LINE_PAUSE_FRAMES
    end_hold_ms: int = END_HOLD_MS
    hold_as_single_frame: bool = False

    def char_delay(self, line: str) -> int:
        return self.char_delay_ms

    def line_pause(self) -> List[int]:
        return [self.char_delay_ms] * self.line_pause_frames

    def end_hold(self) -> List[int]:
        if self.end_hold_ms <= 0:
            return []
        if self.hold_as_single_frame:
            return [self.end_hold_ms]
        return [self.char_delay_ms] * math.ceil(self.end_hold_ms / self.char_delay_ms)


@dataclass(frozen=True)
class LineDurationPacing:
    """Each line takes the same total time, whatever its length."""

    line_duration_ms: int = LINE_DURATION_MS
    line_pause_ms: int = LINE_PAUSE_MS
    end_hold_ms: int = END_HOLD_MS

    def char_delay(self, line: str) -> int:
        return max(1, round(self.line_duration_ms / len(line)))

    def line_pause(self) -> List[int]:
        return [self.line_pause_ms] if self.line_pause_ms > 0 else []

    def end_hold(self) -> List[int]:
        return [self.end_hold_ms] if self.end_hold_ms > 0 else []


# This function does pick the pacing for a configured style name.
# Line pacing always holds the finished panel as one frame.
def build_pacing(name: str, hold_as_single_frame: bool = False):
    if name == PACING_LINE:
        return LineDurationPacing()
    return FixedCharacterPacing(hold_as_single_frame=hold_as_single_frame)


# This function does plan the typing animation without drawing anything.
# Lines above the current one are complete, lines below are still empty.
def iter_typing_states(lines: Sequence[str], pacing) -> Iterator[TypingState]:
    typed = [""] * len(lines)
    for index, line in enumerate(lines):
        if not line:
            continue
        delay = pacing.char_delay(line)
        for position in range(1, len(line) + 1):
            typed[index] = line[:position]
            yield tuple(typed), delay
        for pause in pacing.line_pause():
            yield tuple(typed), pause

    for hold in pacing.end_hold():
        yield tuple(typed), hold


# This function does load a monospaced font for frame text.
# It falls back to Pillow's bundled font when none is installed.
def load_font(size: int = FONT_SIZE):
    for path in FONT_PATHS:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    return ImageFont.load_default(size)


class FrameRenderer:

    # This function does fix canvas geometry for a whole frame stream.
    # The longest full line is measured once so every frame shares its x offset.
    def __init__(self, lines: Sequence[str], canvas_size: Tuple[int, int], font=None):
        self.canvas_size = canvas_size
        self.font = font if font is not None else load_font()
        longest = max(lines, key=len) if lines else ""
        text_width = self.font.getlength(longest) if longest else 0
        self.start_x = max(0, int((canvas_size[0] - text_width) / 2))

    def render(self, typed_lines: Sequence[str]) -> Image.Image:
        image = Image.new("RGB", self.canvas_size, BACKGROUND_COLOR)
        draw = ImageDraw.Draw(image)
        y = FIRST_LINE_Y
        for line in typed_lines:
            if line:
                draw.text((self.start_x, y), line, fill=FOREGROUND_COLOR, font=self.font, anchor="ls")
            y += LINE_SPACING
        return image


# This function does produce the raster frame stream for a panel.
# It yields (frame, delay in milliseconds) in display order.
def generate_frames(
    lines: Sequence[str],
    canvas_size: Tuple[int, int],
    pacing=None,
    renderer: FrameRenderer = None,
) -> Iterator[Tuple[Image.Image, int]]:
    pacing = pacing if pacing is not None else FixedCharacterPacing()
    renderer = renderer if renderer is not None else FrameRenderer(lines, canvas_size)
    for typed_lines, delay in iter_typing_states(lines, pacing):
        yield renderer.render(typed_lines), delay
