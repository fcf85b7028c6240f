"""Release pipeline.

- args: command-line flags -> RunConfig
- environment: git / gh preconditions
- metadata: project version -> ReleaseDescriptor
- gh: GitHub CLI adapter
- stages: collision guard, build, publish, release, upload
- pipeline: ordered, fail-fast orchestration
"""

from __future__ import annotations
