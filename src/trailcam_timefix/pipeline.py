"""
Per-file pipeline: first frame -> timestamp strip -> OCR -> parse -> DST shift -> file times.

Each video is processed start to finish before the next one. Every failure is
turned into an Outcome so one bad file never stops the run.
"""

import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from . import TimefixError, dst, filetimes, imaging, ocr, parsing

VIDEO_EXTENSIONS = (".mp4", ".avi", ".mov")


class Status(Enum):
    CORRECTED = "corrected"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class Outcome:
    video: Path
    status: Status
    timestamp: Optional[datetime] = None
    correction: dst.Correction = dst.Correction.NONE
    reason: str = ""


@dataclass
class Settings:
    directory: Path
    placed: date
    checked: date
    ffmpeg: Optional[str] = None
    tesseract: Optional[str] = None
    psm: int = ocr.DEFAULT_PSM
    binarize: bool = False
    dry_run: bool = False
    debug_crops: bool = False


class Workspace:
    """Private temp directory holding the frame, crop and ffmpeg log of the current file."""

    def __init__(self):
        self._tmpdir = None
        self.root = None

    def __enter__(self):
        self._tmpdir = tempfile.TemporaryDirectory(prefix="trailcam_timefix_")
        self.root = Path(self._tmpdir.name)
        return self

    def __exit__(self, exc_type, exc, tb):
        self._tmpdir.cleanup()
        self._tmpdir = None
        return False

    @property
    def frame_path(self) -> Path:
        return self.root / "frame.jpg"

    @property
    def crop_path(self) -> Path:
        return self.root / "crop.png"

    @property
    def log_path(self) -> Path:
        return self.root / "ffmpeg.log"

    def reset(self) -> None:
        for path in (self.frame_path, self.crop_path, self.log_path):
            path.unlink(missing_ok=True)


def list_videos(directory: Path) -> List[Path]:
    videos = [
        path
        for path in directory.iterdir()
        if path.is_file()
        and path.suffix.lower() in VIDEO_EXTENSIONS
        and not path.name.startswith(".")
    ]
    return sorted(videos, key=lambda p: p.name)


def process_video(video_path: Path, settings: Settings, workspace: Workspace) -> Outcome:
    workspace.reset()

    try:
        imaging.extract_first_frame(
            video_path, workspace.frame_path, workspace.log_path, ffmpeg=settings.ffmpeg
        )
        imaging.crop_timestamp_region(workspace.frame_path, workspace.crop_path)
        text = ocr.read_text(
            workspace.crop_path,
            tesseract_cmd=settings.tesseract,
            psm=settings.psm,
            binarize_image=settings.binarize,
        )
    except TimefixError as exc:
        return Outcome(video_path, Status.SKIPPED, reason=str(exc))

    tokens = parsing.find_timestamp_tokens(text)
    if not tokens.complete:
        return Outcome(video_path, Status.SKIPPED, reason="No timestamp found in OCR text")

    try:
        timestamp = parsing.parse_timestamp(tokens.date, tokens.time)
    except ValueError:
        return Outcome(
            video_path,
            Status.SKIPPED,
            reason=f"Invalid date/time: date={tokens.date!r} time={tokens.time!r}",
        )

    corrected, correction = dst.correct_timestamp(timestamp, settings.placed, settings.checked)

    if not settings.dry_run:
        try:
            filetimes.set_file_times(video_path, corrected)
        except (OSError, subprocess.CalledProcessError) as exc:
            return Outcome(
                video_path,
                Status.FAILED,
                timestamp=corrected,
                correction=correction,
                reason=f"Could not set file times: {exc}",
            )

    return Outcome(video_path, Status.CORRECTED, timestamp=corrected, correction=correction)


def save_debug_crop(outcome: Outcome, workspace: Workspace, debug_dir: Path) -> Optional[Path]:
    if not workspace.crop_path.exists():
        return None
    debug_dir.mkdir(exist_ok=True)
    target = debug_dir / f"{outcome.video.stem}_crop.png"
    shutil.copyfile(workspace.crop_path, target)
    return target


def describe(outcome: Outcome) -> str:
    name = outcome.video.name
    if outcome.status is Status.CORRECTED:
        text = f"  ✓ {name} -> {outcome.timestamp:%Y-%m-%d %H:%M:%S}"
        if outcome.correction is dst.Correction.FALL_BACK:
            text += " (DST fall back, -1h)"
        elif outcome.correction is dst.Correction.SPRING_FORWARD:
            text += " (DST spring forward, +1h)"
        return text
    if outcome.status is Status.SKIPPED:
        return f"  ⚠️  {outcome.reason}: {name}"
    return f"  ❌ {outcome.reason}: {name}"


def run(settings: Settings) -> List[Outcome]:
    videos = list_videos(settings.directory)
    if not videos:
        print(f"No video files found in {settings.directory}")
        return []

    print(f"Found {len(videos)} video file(s)")
    if settings.dry_run:
        print("Dry run: file times will not be changed")
    print()

    debug_dir = settings.directory / "debug"
    outcomes = []
    with Workspace() as workspace:
        for index, video_path in enumerate(videos, start=1):
            print(f"[{index}/{len(videos)}] {video_path.name}")
            outcome = process_video(video_path, settings, workspace)
            outcomes.append(outcome)
            print(describe(outcome))

            if settings.debug_crops and outcome.status is Status.SKIPPED:
                saved = save_debug_crop(outcome, workspace, debug_dir)
                if saved:
                    print(f"     Debug crop saved to {saved}")

    corrected = sum(1 for o in outcomes if o.status is Status.CORRECTED)
    skipped = sum(1 for o in outcomes if o.status is Status.SKIPPED)
    failed = sum(1 for o in outcomes if o.status is Status.FAILED)
    print()
    print(f"Corrected {corrected}/{len(outcomes)} files ({skipped} skipped, {failed} failed)")
    return outcomes
