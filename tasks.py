import logging
import threading

logger = logging.getLogger(__name__)


class TaskScheduler:
    """Fire-and-forget background work on daemon threads.

    Tasks are not supervised: a failing task is logged and forgotten, and
    there is no limit on how many run at once.
    """

    def __init__(self):
        self._timers = set()
        self._lock = threading.Lock()

    def _run(self, fn, args):
        try:
            fn(*args)
        except Exception as e:
            logger.exception(f"❌ Background task {getattr(fn, '__name__', fn)} failed: {e}")

    def spawn(self, fn, *args):
        thread = threading.Thread(target=self._run, args=(fn, args), daemon=True)
        thread.start()
        return thread

    def call_later(self, delay, fn, *args):
        """Run fn(*args) on its own thread after delay seconds"""
        timer = None

        def fire():
            with self._lock:
                self._timers.discard(timer)
            self._run(fn, args)

        timer = threading.Timer(delay, fire)
        timer.daemon = True
        with self._lock:
            self._timers.add(timer)
        timer.start()
        return timer

    def pending(self):
        with self._lock:
            return len(self._timers)

    def stop(self):
        """Cancel timers that have not fired yet. Running tasks are left alone."""
        with self._lock:
            timers, self._timers = self._timers, set()
        for timer in timers:
            timer.cancel()
