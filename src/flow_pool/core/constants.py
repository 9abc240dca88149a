"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ACCOUNT_CAPACITY = 10
DEFAULT_REGISTRATION_VALIDITY_DAYS = 30
DEFAULT_REGISTRATION_USERNAME = "User"
DEFAULT_AUTO_ASSIGN_ATTEMPTS = 20
