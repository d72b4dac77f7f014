import html
from datetime import datetime

import config
from calls import mask_number
from countries import country_flag


def _time_str(now=None):
    return (now or datetime.now()).strftime("%Y-%m-%d %I:%M:%S %p")


def _duration_str(duration):
    return f"{duration}s" if duration is not None else "N/A"


def _details(call, now=None):
    flag = country_flag(call.country, call.number)
    lines = [
        f"🌍 Country: {html.escape(call.country)} {flag}",
        f"📞 Number: {html.escape(mask_number(call.number))}",
        f"⏱️ Duration: {_duration_str(call.duration)}",
        f"⏰ Time: {_time_str(now)}",
    ]
    return "<blockquote>" + "\n".join(lines) + "</blockquote>"


def detected_message(call):
    flag = country_flag(call.country, call.number)
    return (
        f"🔥 NEW CALL {html.escape(call.country.upper())} {flag} DETECTED ✨\n"
        f"📞 Number: {html.escape(mask_number(call.number))}\n"
        "⏳ Waiting for Call 📞"
    )


def failed_message(call, now=None):
    return (
        "❌ FAILED CALL DETECTED ❌\n\n"
        f"{_details(call, now)}\n\n"
        f"{html.escape(config.FOOTER_TEXT)}"
    )


def recording_caption(call, now=None):
    flag = country_flag(call.country, call.number)
    return (
        f"🔥 NEW CALL {html.escape(call.country.upper())} {flag} RECEIVED ✨\n\n"
        f"{_details(call, now)}\n\n"
        f"{html.escape(config.FOOTER_TEXT)}"
    )


def link_buttons():
    return {
        "inline_keyboard": [
            [
                {"text": f"📢 {config.MAIN_CHANNEL_NAME}", "url": config.MAIN_CHANNEL_URL},
                {"text": f"👮 {config.ADMIN_NAME}", "url": config.ADMIN_URL},
            ]
        ]
    }
