from enum import StrEnum


class ResponseMessage(StrEnum):
    """Messages returned to clients by the account service."""

    AUTHENTICATION_FAILED = "Verification code does not match"
    BAD_CREDENTIALS = "Invalid email or password"
    WRONG_PASSWORD = "Password does not match"
    REFRESH_EXPIRED = "Refresh token has expired. Please log in again"
    TOKEN_INVALID = "Invalid token"
    TOKEN_MISSING = "Token is required"
    USER_NOT_FOUND = "User not found"
    MAIL_DELIVERY_FAILED = "Failed to send email"
    PASSWORD_TOO_LONG = "Password must be at most 72 bytes when UTF-8 encoded"

    CODE_SENT = "Verification code sent to your email"
    CODE_VERIFIED = "Email verified"
    LOGIN_SUCCESS = "Login successful"
    TOKEN_REISSUED = "Token reissued"
    PASSWORD_MATCHED = "Password matches"
    PASSWORD_CHANGED = "Password changed"
    TEMPORARY_PASSWORD_SENT = "Temporary password sent to your email"


class EmailTemplate(StrEnum):
    """Subjects and HTML bodies of outbound account emails."""

    SIGNUP_SUBJECT = "한양대 에리카 DATA 포털 - 회원 가입을 위한 인증 이메일"
    SIGNUP_BODY = (
        "한양대 에리카 DATA 포털 사이트에 가입해주셔서 감사합니다! "
        "아래의 인증번호를 입력하여 회원가입을 완료해주세요."
        "<br><br>"
        "인증번호 {code}"
    )
    TEMPORARY_PASSWORD_SUBJECT = "한양대 에리카 DATA 포털 - 임시 비밀번호 발급"
    TEMPORARY_PASSWORD_BODY = (
        "한양대 에리카 DATA 포털 임시 비밀번호 입니다. "
        "아래의 임시번호를 입력하여 로그인 해주세요."
        "<br><br>"
        "임시 비밀번호 {code}"
    )
