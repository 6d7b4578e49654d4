"""
stage_state.py
--------------
Defines the lifecycle states a resource stage can be in.
"""

from enum import Enum


class StageState(Enum):
    """Lifecycle states for resource stages."""
    CREATED = "created"     # Constructed, nothing loaded
    LOADING = "loading"     # Asset load in flight
    READY = "ready"         # Loaded, may render and receive input
    FAILED = "failed"       # Load raised; only dispose() is legal
    DISPOSED = "disposed"   # Resources released, unusable
