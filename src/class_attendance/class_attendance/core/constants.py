"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CLASS_NAME_MAX_LENGTH = 100
PERSONNEL_NAME_MAX_LENGTH = 100
EMPLOYEE_ID_MAX_LENGTH = 20
SLOT_LABEL_MAX_LENGTH = 20

UNKNOWN_CATEGORY_RANK = 99
