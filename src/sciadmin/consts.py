"""Constants for sciadmin"""

# ==================== File Paths ====================
LOG_FILE_DEFAULT = "data/sciadmin.log"
CONFIG_FILE_DEFAULT = "config.toml"

# ==================== Schema Defaults ====================
DEFAULT_TITLE_KEY = "title"
PLACEHOLDER_PREFIX = "Enter "
REQUIRED_MARKER = "*"
DATE_PREFIX_LENGTH = 10  # YYYY-MM-DD

# ==================== Base Fields ====================
ID_FIELD = "id"
CREATED_AT_FIELD = "createdAt"
UPDATED_AT_FIELD = "updatedAt"

# ==================== HTTP ====================
TITLE_QUERY_PARAM = "title"
JSON_CONTENT_TYPE = "application/json"

# ==================== Environment ====================
ENV_PREFIX = "SCIADMIN_"
ENV_NESTED_DELIMITER = "__"
