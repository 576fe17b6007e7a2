import os


def _salary_config() -> dict:
    return {
        "base_hours": int(os.getenv("SALARY_BASE_HOURS", "4")),
        "overtime_interval": int(os.getenv("SALARY_OVERTIME_INTERVAL", "10")),
        "overtime_rate": os.getenv("SALARY_OVERTIME_RATE", "50"),
    }


def get_settings_module() -> str:
    # APP_ENV picks the settings module, development by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"
