"""
Restore the capture time of trail camera videos from the timestamp burned into
the first frame, correcting for a DST transition during the deployment.
"""

import argparse
import shutil
import sys
from datetime import date
from pathlib import Path

from . import ocr
from .pipeline import Settings, Status, run


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Set trail camera video file times from their embedded timestamps"
    )
    parser.add_argument("directory", type=str, help="Directory containing video files to process")
    parser.add_argument("--placed", type=_iso_date, required=True, help="Date the camera was placed (YYYY-MM-DD)")
    parser.add_argument(
        "--checked",
        type=_iso_date,
        required=True,
        help="Date the camera was checked (YYYY-MM-DD). Compared as midnight: if it was checked "
        "on the day DST changed, give the following day",
    )
    parser.add_argument("--ffmpeg", help="ffmpeg executable (default: ffmpeg on PATH, otherwise OpenCV decodes the frame)")
    parser.add_argument("--tesseract", help="Tesseract executable (default: tesseract on PATH or its usual install location)")
    parser.add_argument("--psm", type=int, default=ocr.DEFAULT_PSM, help="Tesseract page segmentation mode")
    parser.add_argument(
        "--binarize",
        action="store_true",
        help="Apply an Otsu threshold to the timestamp strip before OCR",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show corrected times without changing files")
    parser.add_argument(
        "--debug-crops",
        action="store_true",
        help="Save the timestamp strip of files that could not be read (for debugging)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    input_dir = Path(args.directory)
    if not input_dir.exists():
        print(f"Error: Directory not found: {input_dir}")
        return 1
    if not input_dir.is_dir():
        print(f"Error: Not a directory: {input_dir}")
        return 1
    if args.checked < args.placed:
        print(f"Error: Checked date {args.checked} is before placed date {args.placed}")
        return 1

    settings = Settings(
        directory=input_dir,
        placed=args.placed,
        checked=args.checked,
        ffmpeg=args.ffmpeg or shutil.which("ffmpeg"),
        tesseract=args.tesseract or shutil.which("tesseract") or ocr.DEFAULT_TESSERACT,
        psm=args.psm,
        binarize=args.binarize,
        dry_run=args.dry_run,
        debug_crops=args.debug_crops,
    )

    outcomes = run(settings)
    if any(outcome.status is Status.FAILED for outcome in outcomes):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
