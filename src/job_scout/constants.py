"""Application-wide constants."""

# Sources
LINKEDIN = "linkedin"
INDEED = "indeed"
WELCOME_TO_THE_JUNGLE = "welcometothejungle"
SOURCES = (LINKEDIN, INDEED, WELCOME_TO_THE_JUNGLE)

# Listing defaults
DEFAULT_LOCATION = "France"  # Search location when the query has none
DEFAULT_COUNTRY = "France"  # Every listing in this system is French

# Detail extraction sentinels (mean "field unknown", never real data)
COMPANY_NOT_FOUND = "Company not found"
DESCRIPTION_NOT_AVAILABLE = "Description not available"
LOCATION_NOT_SPECIFIED = "Location not specified"
SENTINEL_VALUES = frozenset({COMPANY_NOT_FOUND, DESCRIPTION_NOT_AVAILABLE, LOCATION_NOT_SPECIFIED})

# Scraping
SEARCH_REQUEST_TIMEOUT = 15  # Search results page timeout in seconds
DETAIL_REQUEST_TIMEOUT = 10  # Job detail page timeout in seconds
MAX_JOBS_PER_SOURCE = 20  # Detail pages fetched per source
DELAY_BETWEEN_SOURCES = 2  # Pause between sources in seconds
MAX_CONCURRENT_DETAILS = 5  # Parallel detail fetches within one source
BLOCKED_STATUS_CODES = frozenset({403, 429, 999})  # 999 is LinkedIn's bot wall

# Identifiers
JOB_ID_LENGTH = 16

# Outbound requests must look like a desktop browser or the boards serve other markup
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "fr-FR,fr;q=0.9,en-US;q=0.8,en;q=0.7",
}

# Storage
DEFAULT_HISTORY_LIMIT = 10  # Recent searches returned by default
DEFAULT_LISTING_LIMIT = 50  # Stored listings returned by default
MAX_RESULTS_LIMIT = 100  # Upper bound for ?limit= on list endpoints

# Saved jobs: application pipeline, in order
SAVED_JOB_STATUSES = ("à postuler", "envoyé", "entretien", "refusé", "accepté")
DEFAULT_SAVED_JOB_STATUS = "à postuler"
MIN_RATING = 1
MAX_RATING = 5
