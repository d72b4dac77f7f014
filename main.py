import logging
import os
import sys

import config
from audio_pipeline import AudioPipeline
from poller import CallPoller
from session import login
from tasks import TaskScheduler
from telegram_notify import CallNotifier

logger = logging.getLogger(__name__)


def setup_logging(log_file=None):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file or config.LOG_FILE, encoding="utf-8"),
        ],
    )


def main():
    setup_logging()
    os.makedirs(config.DOWNLOAD_FOLDER, exist_ok=True)

    session = login(max_retries=config.LOGIN_MAX_RETRIES, headless=config.HEADLESS)
    if session is None:
        logger.error("🔴 Could not login after multiple attempts.")
        return 1

    tasks = TaskScheduler()
    notifier = CallNotifier()
    poller = CallPoller(session, notifier, AudioPipeline(notifier), tasks=tasks)
    try:
        poller.run()
    except KeyboardInterrupt:
        logger.info("🛑 Stopped by user")
    except Exception as e:
        logger.error(f"🔴 Browser or driver crashed! Error: {e}")
        return 1
    finally:
        tasks.stop()
        logger.info("Stopping the bot.")
        session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
