# =============================================================================
# Services Package: Pipeline Components
# =============================================================================
#   - cache.py: Fast-Path Cache (Redis hash)
#   - channel.py: Notification Channel (Redis pub/sub)
#   - fibonacci.py: pluggable Fibonacci calculators
#   - submission.py: Submission Gateway (validate → cache → publish → store)
#   - reader.py: Read Gateway (cache snapshot, submission history)
#   - startup.py: bounded-retry startup probes
# =============================================================================
