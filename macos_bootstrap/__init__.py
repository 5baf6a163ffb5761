"""macOS development-environment bootstrap.

Core design goals:
- One ordered pass of independent steps
- Every step guarded by a probe, so re-runs change nothing
- Package names, URLs and version tags live in a YAML manifest
- Fail fast on the first delegated command that fails
- Centralized logging
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
