import os


class Settings:
    def __init__(self):
        self.app_name = "Ledger Desk"
        self.api_version = "1.0.0"
        self.environment = os.getenv("LEDGER_ENV", "development")
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./ledgerdesk.db")
        self.api_prefix = "/api"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.cors_origins = [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
