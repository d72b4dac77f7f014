import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

LINE_TYPES = ("MOBILE", "FIXED")


class CallStatus(Enum):
    PENDING = "PENDING"
    FAILED = "FAILED"


@dataclass
class CallRecord:
    """One row of the live calls table, rebuilt on every scan."""

    country: str
    number: str
    cli_number: str
    duration: Optional[int] = None
    audio_url: Optional[str] = None
    status: CallStatus = CallStatus.PENDING

    @property
    def failed(self) -> bool:
        return self.status is CallStatus.FAILED


def extract_country(termination: str) -> str:
    """Country part of a termination cell, e.g. "UNITED KINGDOM MOBILE 07123" -> "UNITED KINGDOM"."""
    text = termination.strip()
    for token in re.finditer(r"\S+", text):
        part = token.group(0)
        if part.upper() in LINE_TYPES or re.search(r"\d", part):
            return text[:token.start()].rstrip() or text
    return text


def mask_number(number: str) -> str:
    """Mask phone number, keeping the first 3 and last 4 characters"""
    num = str(number).strip()
    if len(num) > 7:
        return num[:3] + "***" + num[-4:]
    return num


def parse_duration(text: str) -> Optional[int]:
    """Seconds from "45", "0:45" or "1:02:03"; None when unreadable."""
    text = (text or "").strip().rstrip("s")
    if not text:
        return None
    if re.fullmatch(r"\d+", text):
        return int(text)
    if re.fullmatch(r"\d+(:\d{1,2}){1,2}", text):
        seconds = 0
        for part in text.split(":"):
            seconds = seconds * 60 + int(part)
        return seconds
    return None
