"""Error taxonomy for candidate discovery."""


class DiscoveryError(Exception):
    """Base class for discovery failures."""


class ProviderUnavailable(DiscoveryError):
    """Transport failure, timeout or non-success status from one provider."""

    def __init__(self, provider: str, cause: object):
        self.provider = provider
        self.cause = cause
        super().__init__(f"{provider} search unavailable: {cause}")


class ProviderError(DiscoveryError):
    """Provider answered but reported an application-level error."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"{provider} search error: {message}")


class ConfigurationMissing(DiscoveryError):
    """No search provider has a credential configured."""

    def __init__(self, message: str = "Search is unavailable: no search provider API key is configured."):
        self.message = message
        super().__init__(message)
