from enums.dispatch import ErrorKind


class DispatchError(Exception):
    kind: ErrorKind = ErrorKind.SUBMISSION

    def __init__(self, message: str | None = None):
        self.message = message or self.kind.message
        super().__init__(self.message)


class AuthenticationError(DispatchError):
    kind = ErrorKind.AUTHENTICATION


class ValidationError(DispatchError):
    kind = ErrorKind.VALIDATION


class ConfigurationError(DispatchError):
    kind = ErrorKind.CONFIGURATION


class TokenError(DispatchError):
    kind = ErrorKind.TOKEN


class SubmissionError(DispatchError):
    kind = ErrorKind.SUBMISSION


class ProvisioningError(ValueError):
    pass
