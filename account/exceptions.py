"""Account exceptions."""

from account.constants import ResponseMessage


class AccountException(Exception):
    """Base account exception with HTTP status."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationFailed(AccountException):
    """Verification code mismatch or bad login credentials."""

    def __init__(self, message: str = ResponseMessage.AUTHENTICATION_FAILED):
        super().__init__(message, status_code=401)


class WrongPassword(AccountException):
    def __init__(self, message: str = ResponseMessage.WRONG_PASSWORD):
        super().__init__(message, status_code=401)


class TokenExpired(AccountException):
    """Refresh token failed validation; the caller has to log in again."""

    def __init__(self, message: str = ResponseMessage.REFRESH_EXPIRED):
        super().__init__(message, status_code=401)


class InvalidToken(AccountException):
    def __init__(self, message: str = ResponseMessage.TOKEN_INVALID):
        super().__init__(message, status_code=401)


class UserNotFound(AccountException):
    def __init__(self, message: str = ResponseMessage.USER_NOT_FOUND):
        super().__init__(message, status_code=404)


class MailDeliveryError(AccountException):
    """The mail transport did not accept the message."""

    def __init__(self, message: str = ResponseMessage.MAIL_DELIVERY_FAILED):
        super().__init__(message, status_code=502)


class PasswordTooLong(AccountException):
    """bcrypt only hashes the first 72 bytes of a password."""

    def __init__(self, message: str = ResponseMessage.PASSWORD_TOO_LONG):
        super().__init__(message, status_code=400)
