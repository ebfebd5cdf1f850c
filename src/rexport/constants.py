"""
Global constants for rexport.
"""

from datetime import timedelta

# Export job envelope policy
EXPORT_JOB_TYPE = "repository_export"
EXPORT_JOB_MAX_RETRIES = 1  # one retry after the first attempt
EXPORT_JOB_TIMEOUT = timedelta(minutes=45)
EXPORT_REPO_JOB_UID = "export_repo_{}"
EXPORT_SPACE_JOB_UID = "export_space_{}"

# Job payload format
PAYLOAD_VERSION = 1

# Username embedded in credentialed push URLs
PUSH_URL_USERNAME = "token"

# Notification
EVENT_REPOSITORY_EXPORT_COMPLETED = "repository_export_completed"

# Remote hosting API
REMOTE_API_PREFIX = "/api/v1"
DEFAULT_HTTP_TIMEOUT = 30.0

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Keyring
KEYRING_SERVICE = "rexport:payload_key"
KEYRING_USERNAME = "payload_key"

# Logging constants
LOG_APP_NAME = "rexport"
LOG_FILE_NAME = "rexport"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "token", "access_token", "refresh_token", "jwk", "key", "secret",
    "authorization", "x-api-key", "api_key", "bearer", "session", "cookie",
    "remote_url"
)
