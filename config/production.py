import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll_db"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Payroll rules
CURRENCY_PLACES = int(os.getenv("CURRENCY_PLACES", "2"))
PROVIDENT_FUND_NAMES = [n.strip() for n in os.getenv("PROVIDENT_FUND_NAMES", "provident fund,pf").split(",") if n.strip()]
LATE_CUTOFF = os.getenv("LATE_CUTOFF", "08:30")
ABSENT_CUTOFF = os.getenv("ABSENT_CUTOFF", "14:00")
ABSENCE_PENALTY = os.getenv("ABSENCE_PENALTY", "none")
ABSENCE_PENALTY_PER_DAY = os.getenv("ABSENCE_PENALTY_PER_DAY", "0")
LATE_PENALTY_PER_DAY = os.getenv("LATE_PENALTY_PER_DAY", "0")

LOCK_TIMEOUT_SECONDS = float(os.getenv("LOCK_TIMEOUT_SECONDS", "5"))
DRAFT_TTL_SECONDS = int(os.getenv("DRAFT_TTL_SECONDS", "1800"))

# Identity forwarded by the upstream gateway
ACTOR_HEADER = os.getenv("ACTOR_HEADER", "X-Actor-Id")
ROLE_HEADER = os.getenv("ROLE_HEADER", "X-Actor-Role")
