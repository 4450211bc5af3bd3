"""
Project-wide constants for the offergrab client core
"""  # noqa: D200, D212, D415

# ==============================================================================
# Backend Functions
# ==============================================================================

DEFAULT_FUNCTIONS_BASE_URL = "https://juxjsxgmghpdhurjkmyd.supabase.co/functions/v1"

# Publishable (anon) key; safe to ship to clients
DEFAULT_PUBLISHABLE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJpc3MiOiJzdXBhYmFzZSIsInJlZiI6Imp1eGpzeGdtZ2hwZGh1cmprbXlkIiwicm9sZSI6ImFub24i"
    "LCJpYXQiOjE3NjQ3NDAwNjIsImV4cCI6MjA4MDMxNjA2Mn0."
    "FhQyySpXz2y5AIJv3Evr72lRe4I_rKr9AGSf1phZm3E"
)

NETWORK_TIMEOUT = 30.0  # seconds

# Primary-transport messages that mean the request never reached the backend
# (matched case-insensitively)
FALLBACK_PHRASES = (
    "failed to send a request to the edge function",
    "failed to fetch",
    "network",
)

# ==============================================================================
# Geo Lookup
# ==============================================================================

UNKNOWN_COUNTRY = "XX"
WORLDWIDE_TOKENS = frozenset({"worldwide", "ww"})

IPAPI_URL = "https://ipapi.co/json/"
IPWHO_URL = "https://ipwho.is/"
CLOUDFLARE_TRACE_URL = "https://www.cloudflare.com/cdn-cgi/trace"

GEO_TIMEOUT = 3.0  # seconds, per provider

# Country names admins tend to type instead of ISO codes
COUNTRY_ALIASES = {
    "india": "IN",
    "united states": "US",
    "usa": "US",
    "united kingdom": "GB",
    "uk": "GB",
}

# ==============================================================================
# Session Storage
# ==============================================================================

INTERACTION_KEY = "offergrab_user_interacted"
SESSION_ID_KEY = "offergrab_session_id"
INTERACTED_VALUE = "true"

# ==============================================================================
# Export
# ==============================================================================

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
CSV_SUFFIX = ".csv"
