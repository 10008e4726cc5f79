"""Global pytest configuration."""

import os

# Keep bookings in memory unless a test opts into a database explicitly
os.environ.pop("PLANNER_DATABASE_URL", None)
