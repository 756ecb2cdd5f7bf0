"""
clarityweb/utils/constants.py

Purpose: Application-wide constants

- Route paths and route classification
- Session cookie names
- Content extraction headers and user-facing messages
"""

# ==============================================
# APP
# ==============================================

APP_NAME = "ClarityWeb"
APP_DESCRIPTION = "Make any text accessible to everyone"
APP_VERSION = "1.0.0"

# ==============================================
# ROUTES
# ==============================================

ROUTE_LOGIN = "/login"
ROUTE_REGISTER = "/register"
ROUTE_DASHBOARD = "/dashboard"
ROUTE_DASHBOARD_ONBOARDING = "/dashboard/onboarding"
ROUTE_SETTINGS = "/dashboard/settings"
ROUTE_FAVORITES = "/dashboard/favorites"
ROUTE_HISTORY = "/dashboard/history"
ROUTE_SIMPLIFY = "/simplify"

# Prefix match
PROTECTED_ROUTE_PREFIXES = (ROUTE_DASHBOARD, ROUTE_SIMPLIFY)

# Exact match
AUTH_ROUTES = (ROUTE_LOGIN, ROUTE_REGISTER)

CALLBACK_URL_PARAM = "callbackUrl"

# Paths the route gate runs on: everything except api/trpc/framework prefixes
# and anything containing a dot (static files)
GATED_PATH_PATTERN = r"/(?!api|trpc|_next|_vercel|.*\..*).*"

# Sidebar sections: slug under /dashboard -> (label, href)
DASHBOARD_SECTIONS = {
    "history": ("History", ROUTE_HISTORY),
    "favorites": ("Favorites", ROUTE_FAVORITES),
    "settings": ("Settings", ROUTE_SETTINGS),
    "onboarding": ("Getting started", ROUTE_DASHBOARD_ONBOARDING),
}

# ==============================================
# SESSION
# ==============================================

SESSION_COOKIE_NAME = "next-auth.session-token"
SECURE_SESSION_COOKIE_NAME = "__Secure-next-auth.session-token"
SESSION_COOKIE_NAMES = (SESSION_COOKIE_NAME, SECURE_SESSION_COOKIE_NAME)
SESSION_TOKEN_ALGORITHM = "HS256"

# ==============================================
# CONTENT EXTRACTION
# ==============================================

EXTRACTION_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

EXTRACTION_HEADERS = {
    "User-Agent": EXTRACTION_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Cache-Control": "no-cache",
}

HTML_CONTENT_TYPES = ("text/html", "application/xhtml")

HTTP_STATUS_MESSAGES = {
    401: "This page requires authentication",
    403: "Access to this page is forbidden",
    404: "The page was not found",
    429: "Too many requests. Please try again later",
    500: "The server encountered an error",
    502: "Bad gateway - the server is temporarily unavailable",
    503: "The service is temporarily unavailable",
}

ERROR_INVALID_URL = "Invalid URL format"
ERROR_URL_PROTOCOL = "URL must use HTTP or HTTPS protocol"
ERROR_NOT_HTML = "URL does not point to an HTML page"
ERROR_NO_READABLE_CONTENT = (
    "Could not extract readable content from this page. "
    "It may be behind a paywall or use JavaScript rendering."
)
ERROR_CONTENT_TOO_SHORT = (
    "Extracted content is too short. "
    "The page may use JavaScript rendering or have limited text content."
)
ERROR_TIMEOUT = "Request timed out. The page took too long to load."
ERROR_DNS = "Could not find the website. Please check the URL."
ERROR_CONNECTION_REFUSED = "Connection refused. The website may be down."
ERROR_CERTIFICATE = "SSL certificate error. The website's security certificate may be invalid."
ERROR_FETCH_GENERIC = (
    "Failed to extract content from URL. "
    "Please try again or use text input instead."
)

# Shown by the extraction action itself
ERROR_EXTRACTION_FAILED = "Failed to extract content from URL"
ERROR_EXTRACTION_UNEXPECTED = "An unexpected error occurred while extracting content"

# ==============================================
# ACCOUNT
# ==============================================

ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_USER_NOT_FOUND = "User not found"
MESSAGE_ONBOARDING_RESET = "Onboarding reset - refresh the page to restart"

# ==============================================
# HISTORY AND PREFERENCES
# ==============================================

ERROR_SIMPLIFICATION_NOT_FOUND = "Simplification not found"
ERROR_NO_PREFERENCES = "No preferences to update"
HISTORY_DEFAULT_PAGE_SIZE = 10
HISTORY_MAX_PAGE_SIZE = 50
