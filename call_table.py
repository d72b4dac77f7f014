import logging
import re

from bs4 import BeautifulSoup

import config
from calls import CallRecord, CallStatus, extract_country, parse_duration

logger = logging.getLogger(__name__)

# Live calls table plus the "last activity" panel, scanned in document order
ROW_SELECTOR = "#LiveCalls tr, #last-activity tbody.lastdata tr"
PLAY_BUTTON_SELECTOR = "button[onclick*='Play']"
PLAY_ARGS_RE = re.compile(r"""Play\(['"]([^'"]+)['"],\s*['"]([^'"]+)['"]\)""")


def parse_play_handler(onclick):
    """(did, uuid) from an onclick like Play('123', 'abc-def'), else None"""
    if not onclick:
        return None
    match = PLAY_ARGS_RE.search(onclick)
    if not match:
        return None
    return match.group(1), match.group(2)


def recording_url(did, uuid):
    return f"{config.SOUND_URL}?did={did}&uuid={uuid}"


def iter_rows(page_html):
    """Yield (cell texts, play onclick or None) for every row with at least 3 columns."""
    soup = BeautifulSoup(page_html, "html.parser")
    for row in soup.select(ROW_SELECTOR):
        cells = row.find_all("td")
        if len(cells) < 3:
            continue
        texts = [cell.get_text(" ", strip=True) for cell in cells]
        play_button = row.select_one(PLAY_BUTTON_SELECTOR)
        onclick = play_button.get("onclick") if play_button is not None else None
        yield texts, onclick


def build_call(texts, onclick=None):
    status_text = texts[-1].strip().upper()
    duration = parse_duration(texts[3]) if len(texts) >= 5 else None

    audio_url = None
    play_args = parse_play_handler(onclick)
    if play_args:
        audio_url = recording_url(*play_args)
    elif onclick:
        logger.debug(f"Unparseable play handler: {onclick!r}")

    return CallRecord(
        country=extract_country(texts[0]),
        number=texts[1].strip(),
        cli_number=texts[2].strip(),
        duration=duration,
        audio_url=audio_url,
        status=CallStatus.FAILED if status_text == "FAILED" else CallStatus.PENDING,
    )


def parse_calls(page_html):
    """Calls currently shown on the live calls page, in document order."""
    calls = []
    for texts, onclick in iter_rows(page_html):
        call = build_call(texts, onclick)
        if not call.cli_number:
            continue
        calls.append(call)
    return calls
