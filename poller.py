import logging
import threading
import time

import schedule

import config
from call_table import parse_calls
from seen_calls import SeenCalls
from tasks import TaskScheduler

logger = logging.getLogger(__name__)


class CallPoller:
    """Watches the live calls page and hands every new call to the notifier.

    Each cli_number is marked seen before anything is sent for it, so a call
    that shows up on many scans is handled once per run.
    """

    def __init__(self, session, notifier, pipeline, seen_calls=None, tasks=None,
                 sleep=time.sleep, check_interval=None, error_backoff=None,
                 audio_delay=None, refresh_minutes=None):
        self.session = session
        self.notifier = notifier
        self.pipeline = pipeline
        self.seen_calls = seen_calls if seen_calls is not None else SeenCalls()
        self.tasks = tasks or TaskScheduler()
        self.sleep = sleep
        self.check_interval = config.CHECK_INTERVAL if check_interval is None else check_interval
        self.error_backoff = config.ERROR_BACKOFF if error_backoff is None else error_backoff
        self.audio_delay = config.AUDIO_DELAY if audio_delay is None else audio_delay
        self.refresh_minutes = config.REFRESH_INTERVAL_MINUTES if refresh_minutes is None else refresh_minutes
        self.stop_event = threading.Event()
        self.refresh_scheduler = schedule.Scheduler()
        self._refresh_thread = None

    # ------------------------------------------------------------------
    # Page refresh
    # ------------------------------------------------------------------
    def reload_page(self):
        logger.info(f"🕒 {self.refresh_minutes} minutes passed. Refreshing page...")
        try:
            self.session.driver.refresh()
            logger.info("✅ Page refreshed successfully.")
        except Exception as e:
            logger.error(f"🔴 Page refresh failed: {e}")

    def _run_refresh_scheduler(self):
        while not self.stop_event.is_set():
            self.refresh_scheduler.run_pending()
            self.stop_event.wait(1)

    def start_page_refresh(self):
        self.refresh_scheduler.every(self.refresh_minutes).minutes.do(self.reload_page)
        self._refresh_thread = threading.Thread(target=self._run_refresh_scheduler, daemon=True)
        self._refresh_thread.start()

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------
    def announce(self, call):
        """Detected alert now, recording after the server has finished writing it"""
        handle = self.notifier.notify_detected(call)
        self.tasks.call_later(self.audio_delay, self.pipeline.process, call, self.session, handle)

    def handle_call(self, call):
        if self.seen_calls.seen(call.cli_number):
            return False
        self.seen_calls.mark(call.cli_number)

        if call.failed:
            self.notifier.notify_failed(call)
        elif call.audio_url:
            self.tasks.spawn(self.announce, call)
        else:
            logger.debug(f"No recording link for {call.cli_number}, nothing to send")
        return True

    def scan(self, page_html):
        """Process one snapshot of the page. Returns the newly seen calls."""
        new_calls = []
        for call in parse_calls(page_html):
            if self.handle_call(call):
                new_calls.append(call)
        return new_calls

    def tick(self):
        try:
            self.scan(self.session.driver.page_source)
        except Exception as e:
            logger.error(f"🔴 Unexpected error in monitoring loop: {e}")
            self.sleep(self.error_backoff)

    def run(self):
        """Poll until stop() is called or an error escapes."""
        self.start_page_refresh()
        logger.info("🚀 Monitoring started...")
        try:
            while not self.stop_event.is_set():
                self.tick()
                self.sleep(self.check_interval)
        finally:
            self.stop()

    def stop(self):
        self.stop_event.set()
        self.refresh_scheduler.clear()
