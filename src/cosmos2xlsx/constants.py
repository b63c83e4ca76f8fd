"""
Global constants for the cosmos2xlsx CLI.
"""

# Application identity
APP_NAME = "cosmos2xlsx"

# Query constants
DEFAULT_QUERY = "SELECT * FROM c"
DEFAULT_PAGE_SIZE = 1000

# Workbook constants
SHEET_EXTENSION = "xlsx"
SHEET_TITLE_MAX_LENGTH = 31
SHEET_TITLE_INVALID_CHARS = "[]:*?/\\"
DEFAULT_SHEET_TITLE = "Sheet1"
MAX_COLUMN_WIDTH = 60
# Excel stores at most this many characters in a cell
MAX_CELL_LENGTH = 32767

# Environment variables
ENV_CONNECTION_STRING = "COSMOS2XLSX_CONNECTION_STRING"
ENV_DATABASE = "COSMOS2XLSX_DATABASE"

# Keyring
KEYRING_SERVICE = "cosmos2xlsx"
KEYRING_CONNECTION_USER = "connection_string"

# Settings that may be stored in settings.json
SETTING_KEYS = ("log_level", "output_dir", "page_size", "database")

# Exit codes
EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

# Logging constants
LOG_APP_NAME = "cosmos2xlsx"
LOG_FILE_NAME = "cosmos2xlsx"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "token", "access_token", "key", "secret", "accountkey",
    "account_key", "connection_string", "authorization", "api_key",
    "signature", "sig"
)
