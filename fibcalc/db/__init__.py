# =============================================================================
# Database Package
# =============================================================================
# Durable Store for accepted submissions.
#
# Key exports:
#   - build_engine / build_session_factory: explicit engine construction
#   - check_database: startup probe (SELECT 1 + create table)
#   - SubmissionStore: append-only repository over the ``values`` table
# =============================================================================
