import os


class Config:
    """Settings shared by every environment; each environment module reads from here."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "hr_payroll")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Attendance day boundaries and the 11:00 cutoff are read in this zone unless the
    # employee row carries its own.
    ATTENDANCE_TIMEZONE = os.environ.get("ATTENDANCE_TIMEZONE", "Asia/Kolkata")
    # Zone of naive timestamps stored in time_clock.
    CLOCK_STORAGE_TIMEZONE = os.environ.get("CLOCK_STORAGE_TIMEZONE", "UTC")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
