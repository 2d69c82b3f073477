import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = Config.db_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

ATTENDANCE_TIMEZONE = Config.ATTENDANCE_TIMEZONE
CLOCK_STORAGE_TIMEZONE = Config.CLOCK_STORAGE_TIMEZONE

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
