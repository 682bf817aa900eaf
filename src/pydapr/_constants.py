"""Internal constants shared across the library."""

DAPR_HTTP_PORT_ENV = "DAPR_HTTP_PORT"
DAPR_API_TOKEN_ENV = "DAPR_API_TOKEN"
DEFAULT_HTTP_PORT = 3500
DEFAULT_HOST = "localhost"
API_VERSION = "v1.0"
API_TOKEN_HEADER = "dapr-api-token"
USER_AGENT = "pydapr-http-client"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# ------------------------------------------------------------------
# Normalized error codes and their default messages
# ------------------------------------------------------------------

ERR_SIDECAR_DOES_NOT_EXIST = "ERR_SIDECAR_DOES_NOT_EXIST"
ERR_REQUEST_FAILED = "ERR_REQUEST_FAILED"
ERR_DOES_NOT_EXIST = "ERR_DOES_NOT_EXIST"
ERR_UNKNOWN = "ERR_UNKNOWN"

MSG_SIDECAR_DOES_NOT_EXIST = (
    "Dapr sidecar is not present. Please follow this link "
    "(https://docs.dapr.io/operations/troubleshooting/common_issues/) "
    "to debug the issue with dapr."
)
MSG_INVALID_ERROR_BODY = "The returned error message from Dapr Service is not a valid JSON Object."
MSG_DOES_NOT_EXIST = "The requested Dapr resource is not properly configured."
MSG_UNKNOWN = "No meaningful error message is returned."
