"""Constants for the Omni Console."""

# Default configuration values
DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 11600
DEFAULT_SETTINGS_FILE = "omni_settings.json"
DEFAULT_MODELS_FILE = "omni_models.json"
DEFAULT_BENCH_DIR = "bench"
DEFAULT_REQUEST_TIMEOUT = 120.0  # seconds, per provider request
CONFIG_FILE_NAME = "config.json"

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library log levels
LIBRARY_LOG_LEVELS = {
    "uvicorn": "WARNING",
    "uvicorn.access": "WARNING",
    "fastapi": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "matplotlib": "WARNING",
}

# HTTP status codes
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404
HTTP_METHOD_NOT_ALLOWED = 405
HTTP_CONFLICT = 409
HTTP_BAD_GATEWAY = 502

# Provider base URLs
GOOGLE_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
OPENAI_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1"

# Wire protocol constants
SSE_DATA_PREFIX = "data:"
SSE_DONE_MARKER = "[DONE]"
ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_MAX_TOKENS = 1024
ANTHROPIC_DELTA_EVENT = "content_block_delta"
ERROR_BODY_PREVIEW_CHARS = 100

# Discovery filters
OPENAI_MODEL_MARKERS = ("gpt", "o1", "davinci")
GEMINI_MODEL_MARKERS = ("generateContent", "gemini")
ANTHROPIC_MODEL_MARKERS = ("claude",)
GEMINI_MODEL_PREFIX = "models/"

# Prompts
DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant. Be concise and accurate."
PROBE_PROMPT = "Ping"

# Message roles
USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
SYSTEM_ROLE = "system"

# Streaming constants
STREAMING_MEDIA_TYPE = "application/x-ndjson"
CACHE_CONTROL_NO_CACHE = "no-cache"

# Health check constants
HEALTH_STATUS_HEALTHY = "healthy"
HEALTH_STATUS_DEGRADED = "degraded"
PROVIDER_STATUS_READY = "ready"
PROVIDER_STATUS_MISSING_KEY = "missing_key"
PROVIDER_STATUS_DISABLED = "disabled"

# Error kinds reported to HTTP clients
ERROR_KIND_TRANSPORT = "transport"
ERROR_KIND_REQUEST = "request"
ERROR_KIND_CREDENTIAL = "credential"
ERROR_KIND_PROVIDER = "provider"

# Masking for API keys in responses
MASKED_KEY_VISIBLE_CHARS = 4
MASK_CHAR = "*"

# Benchmark output files
RESULTS_CSV_NAME = "speedtest_results.csv"
SUMMARY_CSV_NAME = "speedtest_summary.csv"
LATENCY_GRAPH_NAME = "speedtest_latency.png"

# FastAPI app constants
APP_TITLE = "Omni Console"
APP_DESCRIPTION = "Multi-provider LLM chat console with endpoint latency and TTFT benchmarking"
APP_VERSION = "0.1.0"
