# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers, entry point
# - config.py: Environment variable loading and settings
# - dependencies.py: Shared handles injected into route handlers
# - routers/: Endpoint definitions (JSON controllers and HTML pages)
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
