"""
Framework Default Values
All hardcoded values should be defined here and accessed via Config.get()
"""

# ============================================================================
# NETWORK DEFAULTS
# ============================================================================

# Application Server
DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8000

# ============================================================================
# APPLICATION DEFAULTS
# ============================================================================

DEFAULT_APP_NAME = 'willow'
DEFAULT_MODE = 'dev'
MODE_ENV_VAR = 'WILLOW_MODE'

# Web assets
DEFAULT_ASSETS_PATH = '/assets'
DEFAULT_ASSETS_DIST = 'dist'

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_NAME = 'app'
DEFAULT_LOG_DIR = 'logs'
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5

# ============================================================================
# ROUTING DEFAULTS
# ============================================================================

# Marker appended to the engine route string for each active flag
ROUTE_TYPE_MARKERS = {
    'ajax': ' [ajax]',
    'sync': ' [sync]',
    'cli': ' [cli]',
}

AJAX_HEADER = 'X-Requested-With'
AJAX_HEADER_VALUE = 'XMLHttpRequest'
