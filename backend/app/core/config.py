import os

# Empty DATABASE_URL means "no durable backend": the ephemeral store is used.
DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
DB_ECHO = os.getenv("DB_ECHO", "0") == "1"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Mirror resolved attempts to JSONL files here (disabled when empty)
ATTEMPT_LOG_DIR = os.getenv("ATTEMPT_LOG_DIR", "").strip()

# "1" makes approved/rejected one-shot; default keeps re-resolution allowed
STRICT_TRANSITIONS = os.getenv("STRICT_TRANSITIONS", "0") == "1"

PORT = int(os.getenv("PORT", "3000"))
