"""
Project constants definitions
"""

# ============================================================
# Configuration
# ============================================================

ENV_PREFIX = "XFER_"

# ============================================================
# Logging
# ============================================================

DEFAULT_LOG_LEVEL = "INFO"

# ============================================================
# Reporting
# ============================================================

DEFAULT_REPORT_MAX_ROWS = 200
