# =============================================================================
# API Package: FastAPI Route Handlers
# =============================================================================
#   - health.py: GET /health (liveness)
#   - values.py: POST /values, GET /values/current, GET /values/all
#   - deps.py: gateway dependencies resolved from app.state
# =============================================================================
