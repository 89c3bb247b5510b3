"""
HTTP Trigger Base Class.

Abstract base class for Azure Functions HTTP triggers providing consistent
request/response handling.

Specialized Trigger Types:
    BaseHttpTrigger: Generic HTTP endpoint
    SystemMonitoringTrigger: Liveness and diagnostics

Exports:
    BaseHttpTrigger: Base class for HTTP triggers
    SystemMonitoringTrigger: Base class for monitoring
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List
import uuid
import json
from datetime import datetime, timezone

import azure.functions as func
from util_logger import LoggerFactory, ComponentType


class BaseHttpTrigger(ABC):
    """
    Abstract base class for Azure Functions HTTP triggers.

    Provides consistent infrastructure for HTTP request/response handling,
    error handling, and logging patterns.
    """

    def __init__(self, trigger_name: str):
        """
        Initialize HTTP trigger with name for logging context.

        Args:
            trigger_name: Name of the trigger for logging (e.g., "livez")
        """
        self.trigger_name = trigger_name
        self.logger = LoggerFactory.create_logger(ComponentType.TRIGGER, f"HttpTrigger.{trigger_name}")

    # ========================================================================
    # ABSTRACT METHODS - Must be implemented by concrete triggers
    # ========================================================================

    @abstractmethod
    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        """
        Process the HTTP request and return response data.

        Raises:
            ValueError: For client errors (400)
            Exception: For internal server errors (500)
        """
        pass

    @abstractmethod
    def get_allowed_methods(self) -> List[str]:
        """Return list of allowed HTTP methods for this trigger."""
        pass

    # ========================================================================
    # CONCRETE INFRASTRUCTURE METHODS
    # ========================================================================

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Main entry point for HTTP request handling.

        Args:
            req: Azure Functions HTTP request object

        Returns:
            Azure Functions HTTP response with JSON content
        """
        request_id = self._generate_request_id()
        self.logger.debug(f"🌐 [{self.trigger_name}] Request {request_id} started: {req.method} {req.url}")

        try:
            if req.method not in self.get_allowed_methods():
                return self._create_error_response(
                    error="Method not allowed",
                    message=f"Method {req.method} not allowed. Allowed: {', '.join(self.get_allowed_methods())}",
                    status_code=405,
                    request_id=request_id
                )

            response_data = self.process_request(req)
            return self._create_success_response(response_data, request_id)

        except ValueError as e:
            self.logger.warning(f"❌ [{self.trigger_name}] Client error: {e}")
            return self._create_error_response(
                error="Bad request",
                message=str(e),
                status_code=400,
                request_id=request_id
            )

        except Exception as e:
            self.logger.error(f"💥 [{self.trigger_name}] Internal error: {e}", exc_info=True)
            return self._create_error_response(
                error="Internal server error",
                message=str(e),
                status_code=500,
                request_id=request_id
            )

    # ========================================================================
    # PRIVATE INFRASTRUCTURE METHODS
    # ========================================================================

    def _generate_request_id(self) -> str:
        """Generate unique request ID for tracing."""
        return str(uuid.uuid4())[:8]

    def _create_success_response(self, data: Dict[str, Any], request_id: str) -> func.HttpResponse:
        """Create standardized success response."""
        response_data = {
            **data,
            "request_id": request_id,
        }

        return func.HttpResponse(
            json.dumps(response_data, default=str),
            status_code=200,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )

    def _create_error_response(self, error: str, message: str, status_code: int,
                               request_id: str) -> func.HttpResponse:
        """Create standardized error response."""
        response_data = {
            "error": error,
            "message": message,
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        return func.HttpResponse(
            json.dumps(response_data),
            status_code=status_code,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )


class SystemMonitoringTrigger(BaseHttpTrigger):
    """Base class for system monitoring triggers (liveness, diagnostics)."""

    def get_system_timestamp(self) -> str:
        """Get standardized system timestamp."""
        return datetime.now(timezone.utc).isoformat()
