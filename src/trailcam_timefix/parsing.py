import re
from datetime import datetime
from typing import NamedTuple, Optional

# Overlay format: YYYY/MM/DD HH:MM:SS
DATE_PATTERN = re.compile(r"\d{4}/\d{2}/\d{2}")
TIME_PATTERN = re.compile(r"\d{2}:\d{2}:\d{2}")
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


class TimestampTokens(NamedTuple):
    date: Optional[str]
    time: Optional[str]

    @property
    def complete(self) -> bool:
        return self.date is not None and self.time is not None


def find_timestamp_tokens(text: str) -> TimestampTokens:
    """
    Scan OCR output for a date token and a time token.

    The text is split on single spaces and every token is checked; a later
    match overwrites an earlier one. Either field is None when nothing matched.
    """
    date_token = None
    time_token = None
    for token in text.split(" "):
        # psm 11 output is newline separated, so one token can hold several matches
        dates = DATE_PATTERN.findall(token)
        if dates:
            date_token = dates[-1]
        times = TIME_PATTERN.findall(token)
        if times:
            time_token = times[-1]
    return TimestampTokens(date_token, time_token)


def parse_timestamp(date_token: str, time_token: str) -> datetime:
    """Combine the two tokens into a datetime. Raises ValueError on impossible values."""
    return datetime.strptime(f"{date_token} {time_token}", TIMESTAMP_FORMAT)
