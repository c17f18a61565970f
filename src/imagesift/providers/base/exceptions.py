"""Provider-specific exceptions."""


class ProviderError(Exception):
    """Base exception for provider errors."""


class ConnectionError(ProviderError):
    """Raised when the provider has no usable HTTP client."""


class FetchError(ProviderError):
    """Raised when a request to the remote API fails or returns an unusable payload."""


class ConfigurationError(ProviderError):
    """Raised when provider configuration is invalid."""
