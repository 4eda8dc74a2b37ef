# =============================================================================
# app/ - Request Handling Package
# =============================================================================
# This package contains the request-facing layer of the task API:
# - handler.py: Serverless entry point and top-level error boundary
# - router.py: Method/path dispatch to task operations
# - identity.py: Caller identity from authorizer claims
# - responses.py: Response envelope with CORS headers
# - exceptions.py: Domain error taxonomy mapped to status codes
# - config.py: Environment variable loading and settings
# - main.py: Local FastAPI server wrapping the handler
#
# The app layer is thin - it handles request concerns and delegates
# business logic to the core/ package.
# =============================================================================
