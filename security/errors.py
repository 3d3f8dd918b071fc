class AuthError(Exception):
    """Base class for authentication-core failures."""


class InvalidCredential(AuthError):
    """
    Credential check failed. `reason` is either "unknown_identifier" or
    "wrong_secret"; it stays server-side and is never sent to clients.
    """

    UNKNOWN_IDENTIFIER = "unknown_identifier"
    WRONG_SECRET = "wrong_secret"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class RateLimited(AuthError):
    def __init__(self, retry_after: int):
        super().__init__(f"retry after {retry_after}s")
        self.retry_after = retry_after


class DuplicateAccount(AuthError):
    def __init__(self, field: str = "account"):
        super().__init__(f"{field} already in use")
        self.field = field


class BackupFormatInvalid(ValueError):
    pass
