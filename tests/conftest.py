"""Shared fakes for the test suite: browser, Telegram transport and task runner."""

import os
import sys

import pytest
import requests

# Ensure project root is on sys.path
sys.path.insert(0, str(os.path.dirname(os.path.dirname(__file__))))

import config  # noqa: E402


# ---------------------------------------------------------------------------
# Browser fakes
# ---------------------------------------------------------------------------
class FakeElement:
    def __init__(self, attrs=None, on_click=None):
        self.attrs = attrs or {}
        self.typed = ""
        self.clicked = False
        self._on_click = on_click

    def get_attribute(self, name):
        return self.attrs.get(name)

    def send_keys(self, text):
        self.typed += text

    def click(self):
        self.clicked = True
        if self._on_click:
            self._on_click()


class FakeDriver:
    """Just enough of a Selenium WebDriver for the login and polling code."""

    def __init__(self, inputs=None, submit_buttons=None, sign_in_buttons=None,
                 page_source="", cookies=None):
        self.inputs = inputs or []
        self.submit_buttons = submit_buttons or []
        self.sign_in_buttons = sign_in_buttons or []
        self.page_source = page_source
        self.cookies = cookies or []
        self.current_url = "about:blank"
        self.visited = []
        self.quit_called = False
        self.refresh_count = 0
        self.refresh_error = None

    def set_page_load_timeout(self, seconds):
        self.page_load_timeout = seconds

    def get(self, url):
        self.visited.append(url)
        self.current_url = url

    def find_elements(self, by, value):
        if by == "tag name" and value == "input":
            return list(self.inputs)
        if by == "css selector":
            return list(self.submit_buttons)
        if by == "xpath":
            return list(self.sign_in_buttons)
        return []

    def get_cookies(self):
        return list(self.cookies)

    def refresh(self):
        if self.refresh_error:
            raise self.refresh_error
        self.refresh_count += 1

    def quit(self):
        self.quit_called = True


class FakeSession:
    def __init__(self, page_source="", cookie_header="session=abc"):
        self.driver = FakeDriver(page_source=page_source)
        self._cookie_header = cookie_header

    def cookie_header(self):
        return self._cookie_header


# ---------------------------------------------------------------------------
# Telegram / task fakes
# ---------------------------------------------------------------------------
class FakeNotifier:
    def __init__(self, deliver_ok=True):
        self.detected = []
        self.failed = []
        self.delivered = []
        self.retracted = []
        self.deliver_ok = deliver_ok
        self._next_id = 100

    def notify_detected(self, call):
        self.detected.append(call)
        self._next_id += 1
        return self._next_id

    def notify_failed(self, call):
        self.failed.append(call)

    def deliver_recording(self, call, file_path):
        self.delivered.append((call, file_path, os.path.exists(file_path)))
        return self.deliver_ok

    def retract(self, handle):
        self.retracted.append(handle)
        return True


class ManualTasks:
    """Collects spawned and delayed work; tests run it explicitly."""

    def __init__(self):
        self.spawned = []
        self.delayed = []

    def spawn(self, fn, *args):
        self.spawned.append((fn, args))

    def call_later(self, delay, fn, *args):
        self.delayed.append((delay, fn, args))

    def run_spawned(self):
        spawned, self.spawned = self.spawned, []
        for fn, args in spawned:
            fn(*args)

    def run_delayed(self):
        delayed, self.delayed = self.delayed, []
        for _, fn, args in delayed:
            fn(*args)


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, content=b""):
        self.status_code = status_code
        self._json = json_data
        self.content = content

    def json(self):
        if self._json is None:
            raise ValueError("no json")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def manual_tasks():
    return ManualTasks()


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setattr(config, "USERNAME", "agent@example.com")
    monkeypatch.setattr(config, "PASSWORD", "s3cret")
    return config.USERNAME, config.PASSWORD


LIVE_CALLS_HTML = """
<html><body>
<table id="LiveCalls">
  <tr><th>Termination</th><th>DID</th><th>CLI</th><th>Duration</th><th></th><th>Status</th></tr>
  <tr>
    <td>UNITED KINGDOM MOBILE 07123</td>
    <td> 447123456789 </td>
    <td>33612345678</td>
    <td>0:45</td>
    <td><button onclick="Play('447123456789', 'a1b2-c3d4')">Play</button></td>
    <td>answered</td>
  </tr>
  <tr><td>FRANCE</td><td>33</td></tr>
</table>
<div id="last-activity">
  <table><tbody class="lastdata">
    <tr>
      <td>GERMANY FIXED 4930</td>
      <td>4930123456</td>
      <td>4915112345678</td>
      <td>12</td>
      <td><button onclick="Play('4930123456', 'ffff-0000')">Play</button></td>
      <td>Failed</td>
    </tr>
    <tr>
      <td>SPAIN</td>
      <td>34911222333</td>
      <td>34600111222</td>
      <td>8</td>
      <td><button onclick="Play(broken)">Play</button></td>
      <td>ANSWERED</td>
    </tr>
  </tbody></table>
</div>
</body></html>
"""


@pytest.fixture
def live_calls_html():
    return LIVE_CALLS_HTML
