# =============================================================================
# fibcalc: Fibonacci Submission Pipeline
# =============================================================================
# A web API accepts an index, stores it in Postgres, caches a placeholder in
# Redis and publishes a notification. A worker computes fib(index) and
# replaces the placeholder. Clients poll the API for results.
#
# Package structure:
#   fibcalc/
#   ├── api/          → FastAPI route handlers (health, values)
#   ├── db/           → Async engine, ORM model, submission store
#   ├── models/       → Pydantic V2 request/response schemas
#   ├── services/     → Cache, channel, calculators, gateways, startup probes
#   ├── worker/       → Compute worker and its entry point
#   ├── config.py     → Pydantic Settings
#   ├── errors.py     → Exception taxonomy
#   ├── resources.py  → Client construction and release per process
#   └── main.py       → FastAPI application factory
# =============================================================================

__version__ = "0.1.0"
