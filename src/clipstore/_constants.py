"""Internal constants shared across the library."""

QUERY_ENDPOINT = "/query"
UPDATE_ENDPOINT = "/update"
DELETE_ENDPOINT = "/delete"

CONTENT_TYPE = "application/json"

BASE_URL_ENV = "CLIPSTORE_BASE_URL"
# Name used by the browser build of the clipboard frontend.
LEGACY_BASE_URL_ENV = "VITE_API_SERVICE_URL"
REQUEST_TIMEOUT_ENV = "CLIPSTORE_REQUEST_TIMEOUT"
USER_AGENT = "clipstore-python"
