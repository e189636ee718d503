# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App composition (CORS, docs, routes, error handlers, context)
#   and the server entry point
# - config.py: Environment variable loading and settings
# - autoroutes.py: Registers route files found under routes/
# - routes/: Route-definition files, one router per file
#
# The app layer is thin - it handles HTTP concerns and delegates
# action building to the core/ package.
# =============================================================================
