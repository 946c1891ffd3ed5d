"""
Placeholder substitution for mail templates.

Templates use ``{Key}`` markers. Only keys present in ``params`` are replaced;
unknown markers and literal braces (e.g. in inline CSS) are left untouched.
"""

from collections.abc import Mapping

# Template names, matched against packaged files by substring
FIRST_PASSWORD_TEMPLATE = "first_password"
PASSWORD_UPDATED_TEMPLATE = "password_updated"
EMAIL_CONFIRMATION_TEMPLATE = "email_confirmation"

SENDER_COMPANY = "SenderCompany"
SENDER_SYSTEM = "SenderSystem"
USERNAME = "Username"
RECOVERY_URL = "RecoveryUrl"
TOKEN_EXPIRATION = "TokenExpiration"
PROCESS_ID = "ProcessId"


def render_template(content: str, params: Mapping[str, object]) -> str:
    for key, value in params.items():
        content = content.replace(f"{{{key}}}", str(value))
    return content
