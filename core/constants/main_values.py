import os

DATA_DIR = os.getenv("DATA_DIR", ".")

LOG_FILE = os.getenv("LOG_FILE", os.path.join(DATA_DIR, "logs.txt"))
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(DATA_DIR, "uploads"))
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(DATA_DIR, 'donorbook.db')}")

DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "he-IL")
RATE_LIMIT = os.getenv("RATE_LIMIT", "60/minute")
PORT = int(os.getenv("PORT", "8000"))

EMAIL_LOG_FILE = os.getenv("EMAIL_LOG_FILE", os.path.join(DATA_DIR, "emails.txt"))
SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASS = os.getenv("SMTP_PASS", "")
SMTP_FROM = os.getenv("SMTP_FROM") or SMTP_USER
