# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(
        os.environ.get("PROVIDERS_STORAGE_DIR", "~/.prompt-assistant"),
    )
    .expanduser()
    .resolve()
)

PROVIDERS_FILE = os.environ.get(
    "PROMPT_ASSISTANT_PROVIDERS_FILE",
    "providers.json",
)

ENV_FILE = WORKING_DIR / ".env"

# Env key for app log level (used by CLI and app load).
LOG_LEVEL_ENV = "PROMPT_ASSISTANT_LOG_LEVEL"

# When True, expose /docs, /redoc, /openapi.json
# (dev only; keep False in prod).
DOCS_ENABLED = os.environ.get(
    "PROMPT_ASSISTANT_OPENAPI_DOCS",
    "false",
).lower() in (
    "true",
    "1",
    "yes",
)

# Model cache: entries older than this are refetched on the next listing.
MODEL_CACHE_MAX_AGE_MS = int(
    os.environ.get("PROMPT_ASSISTANT_MODEL_CACHE_MAX_AGE_MS", "300000"),
)

# Upstream model listing limits
UPSTREAM_TIMEOUT_SEC = float(
    os.environ.get("PROMPT_ASSISTANT_UPSTREAM_TIMEOUT_SEC", "10"),
)
UPSTREAM_MAX_MODELS = 1000

OPENAI_BASE_URL = os.environ.get(
    "OPENAI_BASE_URL",
    "https://api.openai.com/v1",
)
GEMINI_BASE_URL = os.environ.get(
    "GEMINI_BASE_URL",
    "https://generativelanguage.googleapis.com/v1beta",
)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8088
