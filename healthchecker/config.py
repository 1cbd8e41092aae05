import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Numeric values stay raw strings here; cli.py converts them through
    # argparse so a bad value ends in a usage error instead of an import crash.
    HEALTH_TARGETS: tuple[str, ...] = tuple(
        url.strip()
        for url in os.getenv("HEALTH_TARGETS", "").split(",")
        if url.strip()
    )
    HEALTH_TARGETS_FILE: str | None = os.getenv("HEALTH_TARGETS_FILE")
    HEALTH_CHECK_INTERVAL: str = os.getenv("HEALTH_CHECK_INTERVAL", "10")
    HEALTH_CHECK_TIMEOUT: str = os.getenv("HEALTH_CHECK_TIMEOUT", "3")
    HEALTH_CHECK_WORKERS: str = os.getenv("HEALTH_CHECK_WORKERS", "4")
    HEALTH_HOST: str = os.getenv("HEALTH_HOST", "0.0.0.0")
    HEALTH_PORT: str = os.getenv("HEALTH_PORT", "9000")
    HEALTH_LOG_LEVEL: str = os.getenv("HEALTH_LOG_LEVEL", "INFO").upper()
    HEALTH_LOG_FILE: str = os.getenv("HEALTH_LOG_FILE", "checker.log")
    HEALTH_LOG_MAX_BYTES: str = os.getenv("HEALTH_LOG_MAX_BYTES", str(10 * 1024 * 1024))
    HEALTH_LOG_BACKUP_COUNT: str = os.getenv("HEALTH_LOG_BACKUP_COUNT", "5")


settings = Settings()
