"""Application-wide constants.

This module centralizes all magic numbers and configuration defaults
to ensure a single source of truth and easier maintenance.
"""

# =============================================================================
# Extraction Configuration
# =============================================================================

# Maximum number of characters of page text sent to the model as context
DEFAULT_MAX_EXTRACT_CHARS = 25000

# Elements removed before text extraction (non-content and layout chrome)
NON_CONTENT_TAGS = (
    "script",
    "style",
    "noscript",
    "svg",
    "nav",
    "header",
    "footer",
)

# Document metadata skipped when a page has no <body> element
DOCUMENT_METADATA_TAGS = (
    "head",
    "title",
    "meta",
    "link",
    "base",
)

# =============================================================================
# HTTP Configuration
# =============================================================================

# Timeout for fetching the target page (seconds)
DEFAULT_FETCH_TIMEOUT_SECONDS = 15.0

# User-Agent sent when fetching the target page
DEFAULT_FETCH_USER_AGENT = "web-reader-bot/1.0"

# Largest page body read from the target (bytes); the rest is dropped
DEFAULT_FETCH_MAX_BYTES = 5 * 1024 * 1024

# Default listening port for the HTTP server
DEFAULT_PORT = 4000

# =============================================================================
# Gemini Configuration
# =============================================================================

# Default Gemini model used for answering
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

# Default Vertex AI location
DEFAULT_GOOGLE_CLOUD_LOCATION = "global"

# =============================================================================
# API Messages
# =============================================================================

MISSING_FIELDS_ERROR = "url and question required"

BACKEND_ERROR = "Error calling Gemini API"

GENERIC_SERVER_ERROR = "server error"

# =============================================================================
# Service Metadata
# =============================================================================

SERVICE_NAME = "Web Page Question Answering API"

SERVICE_VERSION = "0.1.0"
