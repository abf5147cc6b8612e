# This file marks the routers package for API route modules.
# Endpoint modules are grouped by concern: appeals and operational health checks.
