import re

import phonenumbers
import pycountry
from phonenumbers import region_code_for_number

DEFAULT_FLAG = "🌍"

# Names the dashboard uses that pycountry does not know
COUNTRY_ALIASES = {
    "UK": "GB",
    "ENGLAND": "GB",
    "USA": "US",
    "RUSSIA": "RU",
    "IRAN": "IR",
    "SYRIA": "SY",
    "VIETNAM": "VN",
    "LAOS": "LA",
    "BOLIVIA": "BO",
    "VENEZUELA": "VE",
    "TANZANIA": "TZ",
    "MOLDOVA": "MD",
    "SOUTH KOREA": "KR",
    "NORTH KOREA": "KP",
    "IVORY COAST": "CI",
    "CONGO DR": "CD",
    "DR CONGO": "CD",
    "CZECH REPUBLIC": "CZ",
    "TURKEY": "TR",
}


def country_to_flag(country_code):
    if not country_code or len(country_code) != 2:
        return DEFAULT_FLAG
    return "".join(chr(127397 + ord(c)) for c in country_code.upper())


def country_code_for_name(name):
    """ISO alpha-2 code for a country name, or None"""
    key = (name or "").strip().upper()
    if not key:
        return None
    if key in COUNTRY_ALIASES:
        return COUNTRY_ALIASES[key]
    try:
        return pycountry.countries.lookup(key).alpha_2
    except LookupError:
        return None


def country_code_for_number(number):
    """ISO alpha-2 code from the number's dialling prefix, or None"""
    digits = re.sub(r"\D", "", number or "")
    if not digits:
        return None
    try:
        parsed = phonenumbers.parse("+" + digits, None)
    except phonenumbers.NumberParseException:
        return None
    region = region_code_for_number(parsed)
    if not region or region == "ZZ":
        return None
    return region


def country_flag(country, number=None):
    """Flag emoji for a country name, falling back to the number's region."""
    code = country_code_for_name(country)
    if code is None and number:
        code = country_code_for_number(number)
    return country_to_flag(code)
