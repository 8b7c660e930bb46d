"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

APP_VERSION = "0.1.0"
API_V1_PREFIX = "/api/v1"

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_USER_NAME_LENGTH = 100
MAX_TEAM_NAME_LENGTH = 100
MAX_ROLE_LENGTH = 50
MAX_IPV6_LENGTH = 45
MAX_STRIPE_ID_LENGTH = 255
MAX_PLAN_NAME_LENGTH = 50
MAX_SUBSCRIPTION_STATUS_LENGTH = 20
MAX_ACTIVITY_ACTION_LENGTH = 50

# Articles
MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 255
MIN_CONTENT_LENGTH = 10
MAX_EXCERPT_LENGTH = 500
MAX_STATUS_LENGTH = 20

# Categories and tags
MIN_TAXONOMY_NAME_LENGTH = 2
MAX_TAXONOMY_NAME_LENGTH = 100

# Password requirements
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 100
BCRYPT_ROUNDS = 12

# Activity feed
ACTIVITY_FEED_LIMIT = 10

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
