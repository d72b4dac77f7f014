import os


def _env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Orange Carrier account
USERNAME = os.getenv("ORANGE_USERNAME", "")
PASSWORD = os.getenv("ORANGE_PASSWORD", "")

# Telegram Bot Configuration
BOT_TOKEN = os.getenv("BOT_TOKEN", "")
CHAT_ID = os.getenv("CHAT_ID", "")

# Inline buttons under every recording
MAIN_CHANNEL_NAME = os.getenv("MAIN_CHANNEL_NAME", "Main Channel")
MAIN_CHANNEL_URL = os.getenv("MAIN_CHANNEL_URL", "https://t.me/")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin")
ADMIN_URL = os.getenv("ADMIN_URL", "https://t.me/")
FOOTER_TEXT = os.getenv("FOOTER_TEXT", "👨‍💻 Powered by Orange Call Relay 🤖")

# Orange Carrier URLs
BASE_URL = "https://www.orangecarrier.com"
LOGIN_URL = f"{BASE_URL}/login"
CALL_URL = f"{BASE_URL}/live/calls"
SOUND_URL = f"{BASE_URL}/live/calls/sound"

# Browser Settings
HEADLESS = _env_flag("HEADLESS", False)
LOGIN_MAX_RETRIES = 2
PAGE_LOAD_TIMEOUT = 60   # seconds for the login page to load
FORM_SCAN_DELAY = 5      # seconds to wait before looking for the login form
NAVIGATION_TIMEOUT = 30  # seconds to wait for the post-login redirect
TYPING_DELAY = 0.1       # seconds between typed characters
LOGIN_MARKERS = ("Dashboard", "Account Code")

# Monitoring Settings
REFRESH_INTERVAL_MINUTES = float(os.getenv("REFRESH_INTERVAL_MINUTES", "5"))
CHECK_INTERVAL = 0.1  # seconds between scans of the calls table
ERROR_BACKOFF = 15    # seconds to wait after an unexpected loop error

# Recording Settings
DOWNLOAD_FOLDER = os.getenv("DOWNLOAD_FOLDER", "recordings")
AUDIO_DELAY = 20          # seconds between the detected alert and the download
RECORDING_TIMEOUT = 30    # seconds for the recording download
MIN_RECORDING_SIZE = 100  # bytes, anything smaller is not a recording
USER_AGENT = "Mozilla/5.0"

# Telegram API Settings
TELEGRAM_TIMEOUT = 10
AUDIO_UPLOAD_TIMEOUT = 30

# Logging
LOG_FILE = os.getenv("LOG_FILE", "bot_log.txt")
