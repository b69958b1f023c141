import os

# --- Portal ---
BASE_URL = os.environ.get(
    "PORTAL_BASE_URL", "https://membership.gocrimson.com/Program/GetProgramDetails"
)

# --- Selectors ---
DATE_PICKER_SELECTOR = ".single-date-select-one-click"
DATE_BUTTON_SELECTOR = ".single-date-select-one-click.single-date-select-button"
CLICKABLE_SELECTOR = "button, [role='button'], a, [onclick]"
CALENDAR_SELECTOR = "[class*='calendar'], [class*='datepicker'], .modal, [class*='popup']"

# --- Scheduling ---
CONCURRENCY = int(os.environ.get("SCRAPE_CONCURRENCY", "8"))

# --- Timing (milliseconds) ---
NAVIGATION_TIMEOUT_MS = int(os.environ.get("NAVIGATION_TIMEOUT_MS", "30000"))
PICKER_TIMEOUT_MS = int(os.environ.get("PICKER_TIMEOUT_MS", "10000"))
SETTLE_TIMEOUT_MS = int(os.environ.get("SETTLE_TIMEOUT_MS", "5000"))
# The portal gives no readiness signal once a date button is clicked, so the
# slot list is read after a fixed delay.
PICKER_SETTLE_MS = 300
CLICK_SETTLE_MS = int(os.environ.get("CLICK_SETTLE_MS", "1000"))
DEBUG_SETTLE_MS = 3000
DEBUG_CLICK_SETTLE_MS = 2000

# --- Browser ---
HEADLESS = os.environ.get("HEADLESS", "1") != "0"
BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

# --- Parsing ---
# Year used when a date label has no parseable year.
FALLBACK_YEAR = 2026
SLOT_LOOKAHEAD_LINES = 4

# --- Logging ---
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
