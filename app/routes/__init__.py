# =============================================================================
# app/routes/ - Route-Definition Files
# =============================================================================
# Every module below this directory is registered by app.autoroutes; its
# location decides its URL prefix:
# - health.py: /health liveness and readiness checks
# - blink/index.py: /blink action card with relative links
# - api/sendcredits/index.py: /api/sendcredits action endpoints
#
# Each module defines `router = APIRouter()` and declares its own root
# path as "" so the prefix is served without a trailing slash.
# =============================================================================
