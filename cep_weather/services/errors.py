class ProviderError(Exception):
    """Base class for failures talking to an outbound collaborator."""


class LocalityNotFoundError(ProviderError):
    """The directory answered, but has no record for the postal code."""


class DirectoryUnavailableError(ProviderError):
    pass


class WeatherUnavailableError(ProviderError):
    pass


class ForwardingError(ProviderError):
    """The resolver could not be reached or its reply could not be decoded."""
