import os
from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_SERVICE_KEY")

IMAGE_BUCKET = os.getenv("SUPABASE_IMAGE_BUCKET", "images")
LISTINGS_TABLE = os.getenv("LISTINGS_TABLE", "listings")
USERS_TABLE = os.getenv("USERS_TABLE", "users")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "marketplace.log")

# Credentials used by the command-line admin view
MARKETPLACE_EMAIL = os.getenv("MARKETPLACE_EMAIL")
MARKETPLACE_PASSWORD = os.getenv("MARKETPLACE_PASSWORD")
