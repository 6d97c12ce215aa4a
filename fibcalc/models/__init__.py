# =============================================================================
# Models Package: Pydantic V2 Schemas
# =============================================================================
# HTTP request/response shapes, kept separate from the ORM model in
# fibcalc/db/models.py.
# =============================================================================
