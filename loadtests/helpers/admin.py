"""Admin credentials for back-office requests."""

import os


def admin_headers() -> dict:
    return {"X-Admin-Token": os.getenv("LOADTEST_ADMIN_TOKEN", "loadtest-admin")}
