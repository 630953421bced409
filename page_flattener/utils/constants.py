"""
Shared constants for the page flattener.

Contains default values consumed by the configuration object.
"""

# Default user agent string for all HTTP requests
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Default per-fetch timeout in seconds
DEFAULT_TIMEOUT = 30

# Default maximum number of resource fetches in flight
DEFAULT_CONCURRENCY = 10

# File extensions a bare or root-relative resource name may carry
DEFAULT_RESOURCE_EXTENSIONS = ("js", "css", "html", "xml", "xhtml")

# <script type="..."> values that are inlined; an empty type is always accepted
DEFAULT_SCRIPT_TYPES = (
    "script/javascript",
    "script/js",
    "application/javascript",
    "text/javascript",
    "application/x-javascript",
    "text/ecmascript",
    "application/ecmascript",
)

# <link rel="..."> values that are inlined as stylesheets
DEFAULT_STYLESHEET_RELS = ("", "stylesheet", "css")

# Web UI defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4000
