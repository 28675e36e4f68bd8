from enum import Enum


class CurrencyException(Exception):
    pass


class ConfigurationError(CurrencyException):
    pass


class EmptyInputError(CurrencyException):
    pass


class ProviderErrorKind(Enum):
    HTTP = "http"
    UNREACHABLE = "unreachable"
    PARSE = "parse"
    REJECTED = "rejected"


class ProviderError(CurrencyException):
    """A failed rate lookup for a whole date bucket, tagged with its provider."""

    kind: ProviderErrorKind

    def __init__(self, provider: str, message: str, url: str | None = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.url = url


class ProviderHTTPError(ProviderError):
    kind = ProviderErrorKind.HTTP

    def __init__(self, provider: str, message: str, status_code: int, url: str | None = None):
        super().__init__(provider, message, url=url)
        self.status_code = status_code


class ProviderUnreachableError(ProviderError):
    kind = ProviderErrorKind.UNREACHABLE


class ResponseParseError(ProviderError):
    kind = ProviderErrorKind.PARSE


class ProviderRejectedError(ProviderError):
    kind = ProviderErrorKind.REJECTED


class RateNotFoundError(CurrencyException):
    def __init__(self, source: str, target: str, provider: str):
        super().__init__(f"{provider}: no rate from {source} to {target}")
        self.source = source
        self.target = target
        self.provider = provider


class ConversionFailedError(CurrencyException):
    """Nothing could be converted and at least one date bucket failed outright."""

    def __init__(self, message: str, failed, errors: list[ProviderError]):
        super().__init__(message)
        self.failed = failed
        self.errors = errors


class StatementImportError(CurrencyException):
    pass


class StatementParseError(CurrencyException):
    pass


class ClassifierError(CurrencyException):
    pass
