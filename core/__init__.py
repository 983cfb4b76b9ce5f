# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the layers below the HTTP routers:
# - models/: Pydantic schemas (DTOs and view models)
# - repositories/: MongoDB data access
# - services/: Business rules on top of the repositories
#
# Routers talk to services only; services talk to repositories only.
# =============================================================================
