"""Internal constants shared across the library."""

API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
ACCEPT = "application/vnd.github+json"
USER_AGENT = "pyattendance"

DEFAULT_REPOSITORY = "MITANSHUR273/NATIONAL_SCIENCE_DAY"
DEFAULT_BRANCH = "main"
ATTENDANCE_PATH = "attendance.json"
SCHOOLS_PATH = "schools.json"

ATTENDANCE_COMMIT_MESSAGE = "Updated attendance percentage"
SCHOOLS_COMMIT_MESSAGE = "Updated school data"
