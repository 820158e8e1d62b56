"""
Service Configuration

All settings are read from the environment once, at import time.
With nothing set, the service listens on :8080 on every interface and
proxies the public cataas.com endpoint.
"""

import os

# ============================================
# Upstream
# ============================================

UPSTREAM_IMAGE_URL = os.getenv("UPSTREAM_IMAGE_URL", "https://cataas.com/cat")

# Unset means the transport default applies (no override)
_timeout = os.getenv("UPSTREAM_TIMEOUT_SECONDS", "").strip()
UPSTREAM_TIMEOUT_SECONDS = float(_timeout) if _timeout else None

# ============================================
# Listener
# ============================================

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

# ============================================
# Logging
# ============================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
