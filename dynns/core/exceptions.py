"""Typed exceptions for namespace provisioning.

Every exception carries an ``exit_code`` so the CLI can select a distinct
status per error category without inspecting messages.
"""

EXIT_UNKNOWN = 1
EXIT_CONFIG = 2
EXIT_AUTH = 3
EXIT_API = 4


class NamespaceClientError(Exception):
    """Base exception for all namespace client operations."""
    exit_code = EXIT_UNKNOWN


class OptionError(NamespaceClientError):
    """A CLI option carried a value that could not be parsed.

    Attributes:
        option_name: Option name without leading dashes (e.g. "labels")
        raw_value: Value exactly as supplied by the user
        detail: Underlying parser or loader message
    """
    exit_code = EXIT_CONFIG

    def __init__(self, option_name: str, raw_value: str, detail: str):
        self.option_name = option_name
        self.raw_value = raw_value
        self.detail = detail
        super().__init__(f"Invalid value for '--{option_name}': {raw_value!r}\n{detail}")


class ConfigurationError(NamespaceClientError):
    """Inputs are individually valid but inconsistent with each other."""
    exit_code = EXIT_CONFIG

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class EnvironmentConfigError(NamespaceClientError):
    """Required setting missing from both the command line and environment."""
    exit_code = EXIT_CONFIG

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Environment Error: {detail}")


class OAuthError(NamespaceClientError):
    """Identity provider refused to issue a usable token.

    Attributes:
        status_code: HTTP status code (0 when the response itself was unusable)
        body: Response body or reason
    """
    exit_code = EXIT_AUTH

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Error from OAuth API, status code: {status_code}\n{body}")


class PlatformAPIError(NamespaceClientError):
    """Platform API answered with a non-success status."""
    exit_code = EXIT_API

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Error from Platform API, status code: {status_code}\n{body}")


class PlatformAPITimeoutError(NamespaceClientError):
    """Platform API did not answer within the request timeout."""
    exit_code = EXIT_API

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Timeout calling Platform API (after {timeout:g}s)")


class UnknownError(NamespaceClientError):
    """Anything that does not fit a more specific category."""
    exit_code = EXIT_UNKNOWN

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
