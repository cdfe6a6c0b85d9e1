#------------------------------------------------------------
#                      output_service.py
#          Writes the animated image and text documents,
#                 replacing previous versions whole.

import os
from typing import Iterable, Tuple
from PIL import Image
from ..config import GIF_PALETTE_COLORS

WROTE_FILE_MESSAGE = "Wrote {path}"
WROTE_GIF_MESSAGE = "Wrote {path} ({frames} frames, {seconds:.1f}s per loop)"


# This function does save UTF-8 text to the given path.
# It overwrites the target file.
def save_text(path: str, content: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as file_handle:
        file_handle.write(content)
    print(WROTE_FILE_MESSAGE.format(path=path))


# This function does encode frames into a looping GIF.
# Frames are quantized to a small adaptive palette; delays are per frame.
def save_gif(frames: Iterable[Tuple[Image.Image, int]], path: str, colors: int = GIF_PALETTE_COLORS) -> int:
    images = []
    durations = []
    for frame, delay in frames:
        images.append(frame.convert("P", palette=Image.Palette.ADAPTIVE, colors=colors))
        durations.append(delay)
    if not images:
        raise ValueError("cannot write a GIF without frames")

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "wb") as file_handle:
        images[0].save(
            file_handle,
            format="GIF",
            save_all=True,
            append_images=images[1:],
            duration=durations,
            loop=0,
        )
    print(WROTE_GIF_MESSAGE.format(path=path, frames=len(images), seconds=sum(durations) / 1000))
    return len(images)
