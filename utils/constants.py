"""
utils/constants.py

Purpose: Centralized static content

- Client-facing error and status messages
- Verification email template
- Pagination defaults

(Prevents hardcoding across the codebase)
"""

# ============================================================
# AUTH
# ============================================================

NOT_AUTHORIZED = "Not authorized"
EMAIL_IN_USE = "Email in use"
INVALID_CREDENTIALS = "Email or password is wrong"
EMAIL_NOT_VERIFIED = "Email is not verified"
USER_NOT_FOUND = "User not found"
ALREADY_VERIFIED = "Verification has already been passed"
VERIFICATION_SUCCESSFUL = "Verification successful"
VERIFICATION_EMAIL_SENT = "Verification email sent"
LOGGED_OUT = "Logged out"
CONCURRENT_LOGIN = "Another login for this account completed first, try again"
MISSING_SUBSCRIPTION = "Missing subscription option"
INVALID_AVATAR = "Avatar must be an image file"
AVATAR_TOO_LARGE = "Avatar file is too large"
MAIL_FAILED = "Failed to send verification email"

# ============================================================
# CONTACTS
# ============================================================

CONTACT_NOT_FOUND = "Contact not found"
INVALID_PAGINATION = "Invalid page or limit"
MISSING_FAVORITE = "Missing field favorite"

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# ============================================================
# VERIFICATION EMAIL
# ============================================================

VERIFICATION_EMAIL_SUBJECT = "Confirm your email"

VERIFICATION_EMAIL_HTML = """<p>Thanks for signing up!</p>
<p><a target="_blank" href="{link}">Click here to verify your email</a></p>
<p>If the button does not work, open this link: {link}</p>"""

VERIFICATION_EMAIL_TEXT = "Verify your email by opening this link: {link}"

# ============================================================
# AVATARS
# ============================================================

GRAVATAR_URL = "https://www.gravatar.com/avatar/{digest}?s=250&d=identicon"
AVATARS_URL_PREFIX = "/avatars"
