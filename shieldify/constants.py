"""
Shared enumerations for reports, audit entries and profiles.

Values are stored as plain strings; the label maps feed the templates.
"""

# Profile roles
ROLE_ADMIN = 'admin'
ROLE_CUSTOMER = 'customer'

VALID_ROLES = [ROLE_ADMIN, ROLE_CUSTOMER]

# Platforms
PLATFORM_LABELS = {
    'facebook': 'Facebook',
    'instagram': 'Instagram',
    'tiktok': 'TikTok',
    'youtube': 'YouTube',
    'threads': 'Threads',
    'website': 'Website',
}
VALID_PLATFORMS = list(PLATFORM_LABELS)

# Report types (discriminant of the form payload)
REPORT_TYPE_COPYRIGHT = 'copyright'
REPORT_TYPE_TRADEMARK = 'trademark'
REPORT_TYPE_COUNTERFEIT = 'counterfeit'
REPORT_TYPE_IMPERSONATOR = 'impersonator'
REPORT_TYPE_OTHER = 'other'

REPORT_TYPE_LABELS = {
    REPORT_TYPE_COPYRIGHT: 'Copyright',
    REPORT_TYPE_TRADEMARK: 'Trademark',
    REPORT_TYPE_COUNTERFEIT: 'Counterfeit',
    REPORT_TYPE_IMPERSONATOR: 'Impersonator',
    REPORT_TYPE_OTHER: 'Other',
}
VALID_REPORT_TYPES = list(REPORT_TYPE_LABELS)

# Report status
STATUS_PENDING = 'pending'
STATUS_APPROVED = 'approved'
STATUS_REJECTED = 'rejected'

STATUS_LABELS = {
    STATUS_PENDING: 'Pending',
    STATUS_APPROVED: 'Approved',
    STATUS_REJECTED: 'Rejected',
}
VALID_STATUSES = list(STATUS_LABELS)

# Audit actions
ACTION_CREATED = 'created'
ACTION_APPROVED = 'approved'
ACTION_REJECTED = 'rejected'
ACTION_UPDATED = 'updated'

VALID_ACTIONS = [ACTION_CREATED, ACTION_APPROVED, ACTION_REJECTED, ACTION_UPDATED]

# Field limits
MIN_TEXT_LENGTH = 2
MAX_DESCRIPTION_LENGTH = 2000
MAX_NOTE_LENGTH = 1000
MAX_INFRINGING_URLS = 50
