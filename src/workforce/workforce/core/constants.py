"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ALL_CONTRACTORS = "all"

EMPLOYEE_ID_PREFIX = "EMP-"
EMPLOYEE_ID_SEED = 1000

DEFAULT_SHIFT = "Gen"

DEPARTMENTS = ("Plant 1", "Plant 3", "Plant 4", "Plant 5", "Plant 6", "Plant 7", "Admin")
UNASSIGNED_DEPARTMENT = "Unassigned"

DESIGNATIONS = (
    "Site Engineer",
    "Supervisor",
    "Electrician",
    "Plumber",
    "Mason",
    "Carpenter",
    "Welder",
    "Laborer",
    "Driver",
    "Foreman",
)

AVATAR_PLACEHOLDER_URL = "https://api.dicebear.com/8.x/initials/svg?seed={seed}"
UNRELIABLE_AVATAR_HOSTS = ("pravatar.cc",)

# Report cell labels
LABEL_PRESENT = "P"
LABEL_ABSENT = "A"
LABEL_LEAVE = "L"
LABEL_NONE = "-"

NOT_AVAILABLE = "N/A"

DEFAULT_TREND_DAYS = 7
DEFAULT_RECENT_HIRES = 5

# ID-1 card format in millimetres
ID_CARD_WIDTH_MM = 85.6
ID_CARD_HEIGHT_MM = 53.98
