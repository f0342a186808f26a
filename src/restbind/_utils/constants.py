# Environment variables
ENV_BASE_URL = "RESTBIND_BASE_URL"
ENV_TIMEOUT = "RESTBIND_TIMEOUT"

# Headers
HEADER_CONTENT_TYPE = "Content-Type"

# Content types
FORM_URLENCODED = "application/x-www-form-urlencoded"

LOGGER_NAME = "restbind"
