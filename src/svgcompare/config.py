import os

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()

# --- Provider credentials ---
DEEPSEEK_API_KEY = os.getenv("DEEPSEEK_API_KEY", "")
# Gemini keys are issued through Google AI Studio; accept either name.
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY", "")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

# --- Provider endpoints / models ---
DEEPSEEK_BASE_URL = os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1")
DEEPSEEK_MODEL = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")

GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")

# --- Generation ---
TEMPERATURE = float(os.getenv("SVGCOMPARE_TEMPERATURE", "0.7"))
MAX_OUTPUT_TOKENS = int(os.getenv("SVGCOMPARE_MAX_OUTPUT_TOKENS", "2048"))
PROVIDER_TIMEOUT_S = float(os.getenv("SVGCOMPARE_TIMEOUT_S", "60"))
PROVIDER_MAX_ATTEMPTS = int(os.getenv("SVGCOMPARE_MAX_ATTEMPTS", "1"))
# Deadline for the whole fan-out; a slow-streaming provider is cut off here.
JOIN_TIMEOUT_S = float(
    os.getenv(
        "SVGCOMPARE_JOIN_TIMEOUT_S",
        str(PROVIDER_TIMEOUT_S * max(1, PROVIDER_MAX_ATTEMPTS)),
    )
)

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "INFO").upper() or "INFO"

# --- Local state ---
STATE_FILE = os.getenv("SVGCOMPARE_STATE_FILE", ".svgcompare/state.json")
HISTORY_LIMIT = 10
