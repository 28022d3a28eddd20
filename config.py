"""Centralized configuration for the platform maintenance scripts.

Loads environment variables (from the OS and optionally .env) and exposes
typed constants for use across the codebase. Secrets such as DATABASE_URL
and STRIPE_SECRET_KEY are required at runtime and not given defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from a local .env if present
load_dotenv()

# Database (Postgres shared with the web backend)
DATABASE_URL = os.getenv("DATABASE_URL")  # Required; do not set a default here
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "false").lower() in ("1", "true", "yes")

# Stripe
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
STRIPE_API_VERSION = os.getenv("STRIPE_API_VERSION", "2025-06-30.basil")
PAYMENT_CURRENCY = "brl"

# Backend HTTP API (smoke checks)
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")
API_TOKEN = os.getenv("API_TOKEN", "")

# Token economy
TOKEN_GRANT_AMOUNT = int(os.getenv("TOKEN_GRANT_AMOUNT", "1000"))
DEFAULT_MIN_BET = 10
DEFAULT_MAX_BET = 500

# Logging
# Valid values: "HUMAN" (default), "JSON"
LOG_FORMAT = os.getenv("LOG_FORMAT", "HUMAN").upper()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
