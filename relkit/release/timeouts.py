from __future__ import annotations

# gh queries (auth status, release view)
GH_TIMEOUT_SECONDS = 60.0

# gh release create / upload (upload size bounded by the artifact)
GH_PUBLISH_TIMEOUT_SECONDS = 10 * 60.0

# Local git operations (rev-parse, tag, add, diff, commit)
GIT_TIMEOUT_SECONDS = 30.0

# Network-bound git operations (push)
GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# Idempotent gh read retry policy
GH_READ_RETRY_ATTEMPTS = 3
GH_READ_RETRY_DELAY_SECONDS = 1.0
