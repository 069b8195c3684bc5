import os


def get_settings_module() -> str:
    # Pick the settings module from APP_ENV, defaulting to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "employee_tracker.config.production"

    if env in {"test", "testing"}:
        return "employee_tracker.config.testing"

    return "employee_tracker.config.development"
