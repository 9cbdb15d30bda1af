## Errors raised while answering a credentials request


class CredentialsHelperError(Exception):
    """Base class for every failure that ends the invocation with exit status 1."""


class UsageError(CredentialsHelperError):
    pass


class AuthResolutionError(CredentialsHelperError):
    pass


class RetrievalError(CredentialsHelperError):
    pass


class ConfigError(RetrievalError):
    pass


class HostnameFormatError(CredentialsHelperError):
    pass
