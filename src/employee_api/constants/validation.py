"""Centralized validation constants for the employee API.

Field limits applied at the HTTP boundary. The domain layer only checks
that required fields are present; lengths and formats are checked here.
"""

from typing import Final

# =============================================================================
# Employee Field Limits
# =============================================================================

NAME_MAX_LENGTH: Final[int] = 100
DOC_NUMBER_MIN_LENGTH: Final[int] = 5
DOC_NUMBER_MAX_LENGTH: Final[int] = 50
MANAGER_NAME_MAX_LENGTH: Final[int] = 200

PASSWORD_MIN_LENGTH: Final[int] = 8
PASSWORD_MAX_LENGTH: Final[int] = 72
# bcrypt rejects longer input; multibyte characters count more than once
PASSWORD_MAX_BYTES: Final[int] = 72

# =============================================================================
# Phone Field Limits
# =============================================================================

PHONE_NUMBER_MAX_LENGTH: Final[int] = 50
PHONE_TYPE_MAX_LENGTH: Final[int] = 50
MAX_PHONES_PER_EMPLOYEE: Final[int] = 20
