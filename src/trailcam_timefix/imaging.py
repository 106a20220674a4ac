"""
Frame extraction and timestamp-strip cropping.

The first frame is dumped with ffmpeg when an executable is available, otherwise
it is read in-process with OpenCV. The overlay sits in the bottom 5% of the frame,
which is cropped with Pillow so the pixel mode and DPI metadata are preserved.
"""

import subprocess
from pathlib import Path
from typing import Optional, Tuple

import cv2
from PIL import Image

from . import FrameExtractionError

# Strip keeps rows from floor(0.95 * height) down to the bottom edge
CROP_TOP_PERCENT = 95


def ffmpeg_command(ffmpeg: str, video_path: Path, frame_path: Path) -> list:
    return [
        ffmpeg,
        "-y",
        "-i", str(video_path),
        "-vf", r"select=eq(n\,0)",
        "-q:v", "3",
        "-vframes", "1",
        str(frame_path),
    ]


def _extract_with_ffmpeg(ffmpeg: str, video_path: Path, frame_path: Path, log_path: Path) -> None:
    cmd = ffmpeg_command(ffmpeg, video_path, frame_path)
    try:
        with log_path.open("wb") as log:
            result = subprocess.run(cmd, stdin=subprocess.DEVNULL, stdout=log, stderr=subprocess.STDOUT)
    except OSError as exc:
        raise FrameExtractionError(f"Could not run {ffmpeg}: {exc}") from exc

    if result.returncode != 0:
        raise FrameExtractionError(f"ffmpeg exited with code {result.returncode} (see {log_path.name})")


def _extract_with_opencv(video_path: Path, frame_path: Path) -> None:
    cap = cv2.VideoCapture(str(video_path))
    try:
        if not cap.isOpened():
            raise FrameExtractionError(f"Could not open video: {video_path.name}")
        ret, frame = cap.read()
        if not ret:
            raise FrameExtractionError(f"No readable frame in {video_path.name}")
    finally:
        cap.release()

    if not cv2.imwrite(str(frame_path), frame):
        raise FrameExtractionError(f"Could not write frame to {frame_path}")


def extract_first_frame(
    video_path: Path,
    frame_path: Path,
    log_path: Path,
    ffmpeg: Optional[str] = None,
) -> Path:
    """
    Write the first frame of a video to frame_path.

    Args:
        video_path: Source video
        frame_path: Image to (over)write
        log_path: Receives ffmpeg's console output; unused by the OpenCV path
        ffmpeg: ffmpeg executable, or None to decode with OpenCV
    """
    if ffmpeg:
        _extract_with_ffmpeg(ffmpeg, video_path, frame_path, log_path)
    else:
        _extract_with_opencv(video_path, frame_path)

    if not frame_path.exists():
        raise FrameExtractionError(f"No frame was written for {video_path.name}")
    return frame_path


def crop_box(width: int, height: int) -> Tuple[int, int, int, int]:
    """Return the (left, top, right, bottom) box of the timestamp strip."""
    top = height * CROP_TOP_PERCENT // 100
    return 0, top, width, height


def crop_timestamp_region(frame_path: Path, crop_path: Path) -> Path:
    try:
        with Image.open(frame_path) as frame:
            box = crop_box(*frame.size)
            strip = frame.crop(box)
            dpi = frame.info.get("dpi")
        if dpi:
            strip.save(crop_path, dpi=dpi)
        else:
            strip.save(crop_path)
    except OSError as exc:
        raise FrameExtractionError(f"Could not crop extracted frame: {exc}") from exc
    return crop_path
