import logging
import os
import re
import time

import requests
from pydub import AudioSegment

import config

logger = logging.getLogger(__name__)


class RecordingError(Exception):
    """The recording could not be fetched or converted."""


def temp_paths(cli_number, folder=None, now=None):
    """(wav, mp3) paths unique per call within a run"""
    folder = folder or config.DOWNLOAD_FOLDER
    stamp = int((now if now is not None else time.time()) * 1000)
    safe_cli = re.sub(r"[^\w+-]", "_", cli_number) or "unknown"
    base = os.path.join(folder, f"call_{stamp}_{safe_cli}")
    return base + ".wav", base + ".mp3"


def download_recording(url, cookie_header, file_path, timeout=None):
    headers = {"Cookie": cookie_header, "User-Agent": config.USER_AGENT}
    try:
        response = requests.get(url, headers=headers, timeout=timeout or config.RECORDING_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RecordingError(f"download failed: {e}") from e

    if len(response.content) < config.MIN_RECORDING_SIZE:
        raise RecordingError(f"recording too small ({len(response.content)} bytes)")

    with open(file_path, "wb") as f:
        f.write(response.content)
    logger.info(f"🎧 Audio file downloaded (WAV): {os.path.basename(file_path)}")


def transcode_to_mp3(src_path, dst_path):
    try:
        AudioSegment.from_file(src_path).export(dst_path, format="mp3", codec="libmp3lame")
    except Exception as e:
        raise RecordingError(f"FFmpeg conversion error: {e}") from e
    logger.info(f"🔄 Converted to MP3: {os.path.basename(dst_path)}")


def remove_files(*paths):
    removed = 0
    for path in paths:
        if path and os.path.exists(path):
            try:
                os.remove(path)
                removed += 1
            except OSError as e:
                logger.warning(f"⚠️ Could not delete {path}: {e}")
    if removed:
        logger.info("🗑 Temporary files deleted.")


class AudioPipeline:
    """Download, convert and post one call's recording, then drop the detected alert."""

    def __init__(self, notifier, folder=None, transcode=transcode_to_mp3):
        self.notifier = notifier
        self.folder = folder or config.DOWNLOAD_FOLDER
        self.transcode = transcode

    def process(self, call, session, notification_handle=None):
        """Run the pipeline for one call. Errors are logged, never raised."""
        if not call.audio_url:
            logger.warning(f"⚠️ No recording URL for {call.cli_number}, skipping")
            return False

        wav_path, mp3_path = temp_paths(call.cli_number, self.folder)
        try:
            download_recording(call.audio_url, session.cookie_header(), wav_path)
            self.transcode(wav_path, mp3_path)

            if not self.notifier.deliver_recording(call, mp3_path):
                return False
            if notification_handle is not None:
                self.notifier.retract(notification_handle)
            return True
        except Exception as e:
            logger.error(f"❌ Error processing call for {call.cli_number}: {e}")
            return False
        finally:
            remove_files(wav_path, mp3_path)
