# =============================================================================
# Django Project Configuration Package
# =============================================================================
# This package contains the Django settings, root URLconf and the WSGI
# application of the payment gateway service.
# =============================================================================
