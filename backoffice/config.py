import logging
import os

# --- API ---
# Not validated: a missing base URL shows up as a failed request.
API_BASE_URL = os.getenv("API_BASE_URL", "")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 10))

# --- IDENTITY PROVIDER ---
AUTH_URL = os.getenv("AUTH_URL", API_BASE_URL)
AUTH_PUBLISHABLE_KEY = os.getenv("AUTH_PUBLISHABLE_KEY", "")

# Role assumed when the role lookup fails or returns nothing.
FALLBACK_ROLE = os.getenv("BACKOFFICE_FALLBACK_ROLE", "guest")

# --- CLIENT STORAGE ---
PREFS_PATH = os.getenv(
    "BACKOFFICE_PREFS_PATH",
    os.path.join(os.path.expanduser("~"), ".backoffice", "prefs.json"),
)
LANGUAGE_KEY = "currLng"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(level=None):
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
