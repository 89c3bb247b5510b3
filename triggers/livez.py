# ============================================================================
# LIVENESS CHECK HTTP TRIGGER
# ============================================================================
# STATUS: HTTP Trigger - GET /api/livez
# PURPOSE: Fast endpoint for load balancer liveness checks
# EXPORTS: LivenessCheckTrigger, livez_trigger
# INTERFACES: SystemMonitoringTrigger (http_base.py)
# DEPENDENCIES: azure.functions (no storage or config access)
# ENTRY_POINTS: livez_trigger.handle_request(req)
# ============================================================================
"""
Lightweight Liveness Check HTTP Trigger.

Must have ZERO external dependencies: no storage checks, no table scan,
no config validation. If this endpoint responds, the app is alive.
"""

from typing import Dict, Any, List
import azure.functions as func
from .http_base import SystemMonitoringTrigger


class LivenessCheckTrigger(SystemMonitoringTrigger):
    """Ultra-lightweight liveness check - no external dependencies."""

    def __init__(self):
        super().__init__("livez")

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        return {
            "status": "alive",
            "timestamp": self.get_system_timestamp()
        }


# Singleton instance
livez_trigger = LivenessCheckTrigger()
