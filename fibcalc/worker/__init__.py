# =============================================================================
# Worker Package: Compute Worker
# =============================================================================
# Subscribes to the "insert" channel, computes fib(index) for each
# notification and writes the result into the cache.
#   - compute.py: ComputeWorker (message handling + subscription loop)
#   - main.py: process entry point (resources, probes, signal handling)
#
# Run with: python -m fibcalc.worker   (or the fibcalc-worker script)
# =============================================================================
