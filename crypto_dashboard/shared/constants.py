"""
Static constants shared by the gateway and the dashboard.
"""

from typing import Final

# Data refresh
REFRESH_INTERVAL: Final[int] = 10  # seconds between gateway calls
INITIAL_COUNTDOWN: Final[int] = 10
COUNTDOWN_RESET: Final[int] = 10
COUNTDOWN_TICK: Final[int] = 1

# Upstream listings
MAX_CRYPTO_ASSETS: Final[int] = 10
API_START_POSITION: Final[int] = 1  # 1-based
QUOTE_CURRENCY: Final[str] = "USD"

# Purchase limits (USD)
MIN_PURCHASE_AMOUNT: Final[float] = 0.01
MAX_PURCHASE_AMOUNT: Final[float] = 5000
PURCHASE_AMOUNT_STEP: Final[float] = 0.01

NOTIFICATION_TIMEOUT: Final[float] = 5.0

DEFAULT_CRYPTO_SYMBOL: Final[str] = "BTC"

VIEW_MODE_LIST: Final[str] = "list"
VIEW_MODE_BOXED: Final[str] = "boxed"
DEFAULT_VIEW_MODE: Final[str] = VIEW_MODE_BOXED

SORT_ASC: Final[str] = "asc"
SORT_DESC: Final[str] = "desc"
DEFAULT_SORT_DIRECTION: Final[str] = SORT_ASC

ERROR_FETCH_FAILED: Final[str] = "Failed to fetch cryptocurrency data"
ERROR_AMOUNT_REQUIRED: Final[str] = "USD amount is required"
ERROR_INVALID_NUMBER: Final[str] = "Please enter a valid number"
ERROR_AMOUNT_TOO_LOW: Final[str] = "Amount must be greater than 0"
ERROR_AMOUNT_TOO_HIGH: Final[str] = f"Amount must not exceed ${MAX_PURCHASE_AMOUNT:,}"
ERROR_SELECT_ASSET: Final[str] = "Please select an asset to purchase"
ERROR_GENERIC: Final[str] = "An unknown error occurred"
ERROR_NO_DATA: Final[str] = "No cryptocurrency data available."
ERROR_FORM_INVALID: Final[str] = "Please fix the form errors before submitting"
ERROR_ASSET_NOT_FOUND: Final[str] = "Selected asset not found"

SUCCESS_PURCHASE_SUBMITTED: Final[str] = (
    "Purchase order submitted! Check the logs for details."
)
