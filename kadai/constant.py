"""Static roles, statuses, messages and form limits."""

from __future__ import annotations

SHOP_NAME = "idli kadai"
CURRENCY_PREFIX = "Rs."

ROLE_BUYER = "buyer"
ROLE_SELLER = "seller"
ROLES: tuple[str, ...] = (ROLE_BUYER, ROLE_SELLER)

STATUS_PENDING = "pending"
STATUS_PREPARING = "preparing"
STATUS_READY = "ready"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"

ORDER_STATUSES: tuple[str, ...] = (
    STATUS_PENDING,
    STATUS_PREPARING,
    STATUS_READY,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
)

STATUS_STYLES: dict[str, str] = {
    STATUS_PENDING: "bold #0b0b0b on #ff9800",
    STATUS_PREPARING: "bold #ffffff on #2196f3",
    STATUS_READY: "bold #0b1f0f on #4caf50",
    STATUS_COMPLETED: "bold #0b1f0f on #4caf50",
    STATUS_CANCELLED: "bold #ffffff on #f44336",
}
UNKNOWN_STATUS_STYLE = "bold #ffffff on #666666"

SESSION_LOADING = "loading"
SESSION_UNAUTHENTICATED = "unauthenticated"
SESSION_AUTHENTICATED = "authenticated"

# Checkout form minimum lengths after trimming.
MIN_CUSTOMER_NAME = 2
MIN_CUSTOMER_PHONE = 10
MIN_ORDER_DESCRIPTION = 5

# Account form minimum lengths.
MIN_USERNAME = 3
MIN_PASSWORD = 6

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

MSG_NETWORK = "Network error. Please check your connection."
MSG_SESSION_EXPIRED = "Session expired. Please login again."
MSG_FORBIDDEN = "You do not have permission to perform this action."
MSG_PAGE_FORBIDDEN = "You do not have permission to access this page"
MSG_NOT_FOUND = "Resource not found."
MSG_SERVER = "Server error. Please try again later."
MSG_MALFORMED = "Unexpected response from the server."
MSG_LOGIN_FAILED = "Login failed. Please check your credentials."
MSG_REGISTER_FAILED = "Registration failed"
MSG_GENERIC = "An error occurred. Please try again."
