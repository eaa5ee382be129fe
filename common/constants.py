import os
from dotenv import load_dotenv

# Values from `.env` (if present) feed the settings below.
load_dotenv(override=False)

API_URL       = os.getenv("ADMIN_API_URL", "http://localhost:5000")
API_TIMEOUT   = float(os.getenv("ADMIN_API_TIMEOUT", "0")) or None   # None -> no client-side timeout
TOKEN_COOKIE  = os.getenv("ADMIN_TOKEN_COOKIE", "adminToken")
TOKEN_DAYS    = int(os.getenv("ADMIN_TOKEN_DAYS", "7"))
MAX_PASSWORD_ATTEMPTS = int(os.getenv("ADMIN_MAX_PASSWORD_ATTEMPTS", "3"))
LOG_LEVEL     = os.getenv("LOG_LEVEL", "INFO")
USER_AGENT    = "sports-admin-console/1.0"

ADMIN_PASSWORD_HEADER = "x-admin-password"
AUTH_FAILURE_STATUSES = (401, 403)

CONTACT_PATH  = "/api/contact"
GALLERY_PATH  = "/api/gallery"
RESULTS_PATH  = "/api/results"
SCHEDULE_PATH = "/api/schedule"
TEAMS_PATH    = "/api/teams"
UPLOAD_PATH   = "/api/upload"
LOGIN_PATH    = "/api/login"
LOGOUT_PATH   = "/api/logout"

SPORTS = [
    "Athletics", "Badminton", "Basketball", "Chess", "Cricket", "Football",
    "Squash", "Table Tennis", "Volleyball", "Weightlifting", "Powerlifting",
    "Tug of War",
]
CATEGORIES      = ["Men", "Women", "Mixed"]
STREAM_STATUSES = ["Ended", "Live", "Upcoming"]
SOURCE_TYPES    = ["url", "upload"]

# Common venues; admins can still type a custom one
VENUES = [
    "Main Ground", "Basketball Court", "Football Ground", "Cricket Ground",
    "Indoor Stadium", "Badminton Court", "Volleyball Court",
    "Table Tennis Room", "Chess Room", "Gym/Weightlifting Room",
]

ALL_FILTER = "All"
DRAW       = "Draw"
