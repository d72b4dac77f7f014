import logging
import time
from dataclasses import dataclass, field
from urllib.parse import urlparse

from selenium import webdriver
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait

import config

logger = logging.getLogger(__name__)

SUBMIT_SELECTOR = "button[type=submit], input[type=submit]"
SIGN_IN_XPATH = "//button[contains(., 'Sign In')]"


class LoginError(Exception):
    """A single login attempt failed."""


@dataclass
class Session:
    """Logged-in browser plus the cookies captured on the live calls page."""

    driver: object
    cookies: list = field(default_factory=list)

    def cookie_header(self):
        return "; ".join(f"{c['name']}={c['value']}" for c in self.cookies)

    def close(self):
        close_browser(self.driver)


def launch_browser(headless=False):
    chrome_options = Options()
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-setuid-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_argument("--start-maximized")
    if headless:
        chrome_options.add_argument("--headless=new")
    return webdriver.Chrome(options=chrome_options)


def close_browser(driver):
    if driver is None:
        return
    try:
        driver.quit()
    except Exception as e:
        logger.warning(f"⚠️ Browser did not close cleanly: {e}")


# ----------------------------------------------------------------------
# Login form discovery
# ----------------------------------------------------------------------
def _attr(attrs, key):
    return (attrs.get(key) or "").lower()


def is_email_type(attrs):
    return _attr(attrs, "type") == "email"


def mentions_email(attrs):
    return any("email" in _attr(attrs, key) for key in ("placeholder", "name", "id"))


def is_password_type(attrs):
    return _attr(attrs, "type") == "password"


# Strategies are tried in order; the first one that matches any input wins
IDENTITY_FIELD_STRATEGIES = (is_email_type, mentions_email)
SECRET_FIELD_STRATEGIES = (is_password_type,)


def find_field(candidates, strategies):
    """First element matched by the highest-priority strategy.

    candidates: list of (element, attrs) where attrs has type/placeholder/name/id.
    """
    for strategy in strategies:
        for element, attrs in candidates:
            if strategy(attrs):
                return element
    return None


def input_candidates(driver):
    candidates = []
    for element in driver.find_elements(By.TAG_NAME, "input"):
        attrs = {key: element.get_attribute(key) for key in ("type", "placeholder", "name", "id")}
        candidates.append((element, attrs))
    return candidates


def find_submit_button(driver):
    buttons = driver.find_elements(By.CSS_SELECTOR, SUBMIT_SELECTOR)
    if buttons:
        return buttons[0]
    buttons = driver.find_elements(By.XPATH, SIGN_IN_XPATH)
    return buttons[0] if buttons else None


def is_target_domain(url):
    host = urlparse(url or "").hostname or ""
    domain = urlparse(config.BASE_URL).hostname
    if domain.startswith("www."):
        domain = domain[4:]
    return host == domain or host.endswith("." + domain)


def looks_logged_in(url, page_source):
    """Still on the carrier's site and the page shows a post-login marker"""
    if not is_target_domain(url):
        return False
    return any(marker in (page_source or "") for marker in config.LOGIN_MARKERS)


def type_slowly(element, text, delay, sleep=time.sleep):
    for char in text:
        element.send_keys(char)
        sleep(delay)


# ----------------------------------------------------------------------
# Login
# ----------------------------------------------------------------------
def sign_in(driver, username, password, sleep=time.sleep):
    """Fill and submit the login form. Raises LoginError when it does not work."""
    logger.info("🌐 Opening login page...")
    driver.set_page_load_timeout(config.PAGE_LOAD_TIMEOUT)
    driver.get(config.LOGIN_URL)

    logger.info(f"⏳ Waiting {config.FORM_SCAN_DELAY} sec before scanning form...")
    sleep(config.FORM_SCAN_DELAY)

    candidates = input_candidates(driver)
    email_field = find_field(candidates, IDENTITY_FIELD_STRATEGIES)
    pass_field = find_field(candidates, SECRET_FIELD_STRATEGIES)
    if email_field is None or pass_field is None:
        raise LoginError("Could not detect email or password field!")

    logger.info("✅ Email & Password fields detected! Auto filling...")
    type_slowly(email_field, username, config.TYPING_DELAY, sleep)
    type_slowly(pass_field, password, config.TYPING_DELAY, sleep)

    login_btn = find_submit_button(driver)
    if login_btn is None:
        raise LoginError("Sign In button not found!")

    logger.info("👉 Clicking Sign In button...")
    login_url = driver.current_url
    login_btn.click()
    try:
        WebDriverWait(driver, config.NAVIGATION_TIMEOUT).until(lambda d: d.current_url != login_url)
    except TimeoutException:
        logger.warning("⏱️ No navigation after Sign In, checking the page anyway")

    if not looks_logged_in(driver.current_url, driver.page_source):
        raise LoginError("Login failed or dashboard not detected.")
    logger.info("🎉 Login successful! Dashboard detected.")


def login(max_retries=None, headless=None, browser_factory=None, sleep=time.sleep):
    """Log in to the dashboard and open the live calls page.

    Every attempt starts a fresh browser. Returns a Session, or None once
    max_retries attempts have failed; no browser is left open in that case.
    """
    max_retries = config.LOGIN_MAX_RETRIES if max_retries is None else max_retries
    headless = config.HEADLESS if headless is None else headless
    browser_factory = browser_factory or launch_browser

    attempt = 0
    while attempt < max_retries:
        driver = None
        try:
            driver = browser_factory(headless=headless)
            sign_in(driver, config.USERNAME, config.PASSWORD, sleep)
            driver.get(config.CALL_URL)
            cookies = driver.get_cookies()
            return Session(driver=driver, cookies=cookies)
        except Exception as e:
            attempt += 1
            logger.error(f"❌ Login attempt {attempt} failed: {e}")
            close_browser(driver)
            if attempt < max_retries:
                logger.info("🔄 Retrying login...")
    return None
