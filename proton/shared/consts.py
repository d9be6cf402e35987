from enum import Enum, IntEnum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class LifecycleEvent(str, Enum):
    REQUEST_RECEIVED = "request.received"
    RESPONSE_CREATED = "response.created"
    RESPONSE_SENT = "response.sent"


class RequestType(IntEnum):
    MAIN = 1
    SUB = 2


# Container keys
APP_KEY = "app"
REQUEST_KEY = "request"
