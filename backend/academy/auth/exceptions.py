"""Authentication-specific exceptions."""

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    """Base authentication error."""

    def __init__(self, detail: str = "Authentication failed") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class MissingUserHeaderError(AuthenticationError):
    """The upstream gateway did not forward a user id."""

    def __init__(self, header: str) -> None:
        super().__init__(detail=f"Missing {header} header")


class InvalidUserHeaderError(AuthenticationError):
    """The forwarded user id is not a UUID."""

    def __init__(self, header: str) -> None:
        super().__init__(detail=f"Invalid {header} header")


class UnknownAuthProviderError(HTTPException):
    """AUTH_PROVIDER holds an unsupported value."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Authentication provider '{provider}' is not supported",
        )
