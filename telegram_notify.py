import json
import logging
import os

import requests

import config
import messages

logger = logging.getLogger(__name__)


def _describe_error(exc):
    """Telegram's own error description when the API answered, else the exception text"""
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            return response.json().get("description") or str(exc)
        except ValueError:
            pass
    return str(exc)


class TelegramClient:
    """Bare Bot API calls: sendMessage, sendAudio, deleteMessage."""

    def __init__(self, bot_token=None, chat_id=None, timeout=None, upload_timeout=None):
        self.bot_token = bot_token or config.BOT_TOKEN
        self.chat_id = chat_id or config.CHAT_ID
        self.timeout = timeout or config.TELEGRAM_TIMEOUT
        self.upload_timeout = upload_timeout or config.AUDIO_UPLOAD_TIMEOUT

    def _url(self, method):
        return f"https://api.telegram.org/bot{self.bot_token}/{method}"

    def send_message(self, text, reply_markup=None):
        """Send a message and return its message_id, or None on failure"""
        payload = {"chat_id": self.chat_id, "text": text, "parse_mode": "HTML"}
        if reply_markup:
            payload["reply_markup"] = reply_markup
        try:
            res = requests.post(self._url("sendMessage"), json=payload, timeout=self.timeout)
            res.raise_for_status()
            return res.json()["result"]["message_id"]
        except requests.RequestException as e:
            logger.error(f"❌ Failed to send message: {_describe_error(e)}")
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"❌ Unexpected sendMessage response: {e}")
        return None

    def send_audio(self, caption, file_path, reply_markup=None):
        payload = {"chat_id": self.chat_id, "caption": caption, "parse_mode": "HTML"}
        if reply_markup:
            payload["reply_markup"] = json.dumps(reply_markup)
        try:
            with open(file_path, "rb") as audio:
                files = {"audio": (os.path.basename(file_path), audio, "audio/mpeg")}
                res = requests.post(
                    self._url("sendAudio"), data=payload, files=files, timeout=self.upload_timeout
                )
            res.raise_for_status()
            logger.info("✔️ Audio file sent to Telegram successfully.")
            return True
        except requests.RequestException as e:
            logger.error(f"❌ Failed to send audio file: {_describe_error(e)}")
        except OSError as e:
            logger.error(f"❌ Could not read audio file {file_path}: {e}")
        return False

    def delete_message(self, message_id):
        payload = {"chat_id": self.chat_id, "message_id": message_id}
        try:
            res = requests.post(self._url("deleteMessage"), json=payload, timeout=self.timeout)
            res.raise_for_status()
            logger.info(f"✅ Message {message_id} deleted successfully.")
            return True
        except requests.RequestException as e:
            logger.error(f"❌ Failed to delete message {message_id}: {_describe_error(e)}")
        return False


class CallNotifier:
    """Call alerts on top of a TelegramClient. Never raises on transport errors."""

    def __init__(self, client=None):
        self.client = client or TelegramClient()

    def notify_detected(self, call):
        message_id = self.client.send_message(messages.detected_message(call))
        if message_id is not None:
            logger.info(f"✅ Instant notification sent for {call.cli_number} (Message ID: {message_id})")
        return message_id

    def notify_failed(self, call):
        if self.client.send_message(messages.failed_message(call)) is not None:
            logger.info(f"❌ Failed call notification sent for {call.number}")

    def deliver_recording(self, call, file_path):
        return self.client.send_audio(
            messages.recording_caption(call), file_path, reply_markup=messages.link_buttons()
        )

    def retract(self, handle):
        if handle is None:
            return False
        return self.client.delete_message(handle)
