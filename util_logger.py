"""
Unified Logger System.

JSON-only structured logging for Azure Functions with Application Insights.

Design Principles:
    - Strong typing with dataclasses (stdlib only)
    - Enum safety for categories
    - Component-specific loggers
    - Clean factory pattern

Exports:
    ComponentType: Enum for component types
    LogLevel: Enum for log levels
    LogContext: Logging context dataclass
    ComponentConfig: Per-component logger settings
    JSONFormatter: Application Insights friendly formatter
    LoggerFactory: Factory for creating loggers
    log_exceptions: Exception logging decorator

Dependencies:
    Standard library only (logging, enum, dataclasses, json)
"""

from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from dataclasses import dataclass
import logging
import sys
import os
import json
import traceback
from functools import wraps


# ============================================================================
# COMPONENT TYPES - Architecture layers
# ============================================================================

class ComponentType(Enum):
    """
    Component types aligned with the pipeline's layers.

    Each layer has specific logging needs and levels.
    """
    TRIGGER = "trigger"        # Invocation boundary (Event Grid / HTTP)
    SERVICE = "service"        # Pipeline orchestration and persistence
    CORE = "core"              # Pure pipeline logic (archive, sandbox, matcher)
    REPOSITORY = "repository"  # Blob and table access
    FACTORY = "factory"        # Object creation layer
    CONFIG = "config"          # Configuration loading


# ============================================================================
# LOG LEVELS - Standard Python levels with enum safety
# ============================================================================

class LogLevel(Enum):
    """
    Standard Python log levels as enum for type safety.
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        """Convert to Python logging level constant."""
        return getattr(logging, self.value)

    @classmethod
    def from_string(cls, level: str) -> 'LogLevel':
        """Create from string, case-insensitive."""
        return cls[level.upper()]


# ============================================================================
# LOG CONTEXT - Correlation and tracking
# ============================================================================

@dataclass
class LogContext:
    """
    Context for log correlation across one archive invocation.
    """
    invocation_id: Optional[str] = None  # Function invocation / request ID
    source_container: Optional[str] = None  # Container holding the archive
    archive_key: Optional[str] = None  # Blob key of the archive
    stage: Optional[str] = None  # IngestStage value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            k: v for k, v in {
                'invocation_id': self.invocation_id,
                'source_container': self.source_container,
                'archive_key': self.archive_key,
                'stage': self.stage,
            }.items() if v is not None
        }


# ============================================================================
# COMPONENT CONFIGURATION - Per-component settings
# ============================================================================

@dataclass
class ComponentConfig:
    """
    Configuration for component-specific logging.
    """
    component_type: ComponentType
    log_level: LogLevel = LogLevel.INFO


# ============================================================================
# JSON FORMATTER - Structured logging for Azure Functions
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging in Azure Functions.
    Outputs logs in a format that Application Insights can automatically parse.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON for Application Insights.

        Args:
            record: Python LogRecord to format

        Returns:
            JSON string with structured log data
        """
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if hasattr(record, 'custom_dimensions'):
            log_obj['customDimensions'] = record.custom_dimensions

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        return json.dumps(log_obj, default=str)


# ============================================================================
# LOGGER FACTORY - Creates component-specific loggers
# ============================================================================

class LoggerFactory:
    """
    Factory for creating component-specific loggers.

    Example:
        logger = LoggerFactory.create_logger(
            ComponentType.SERVICE,
            "CatalogIngestService"
        )
        logger.info("Processing archive")
    """

    _default_level = LogLevel.DEBUG if os.getenv('DEBUG_LOGGING', '').lower() == 'true' else LogLevel.INFO

    DEFAULT_CONFIGS = {
        ComponentType.TRIGGER: ComponentConfig(ComponentType.TRIGGER, log_level=_default_level),
        ComponentType.SERVICE: ComponentConfig(ComponentType.SERVICE, log_level=_default_level),
        ComponentType.CORE: ComponentConfig(ComponentType.CORE, log_level=_default_level),
        ComponentType.REPOSITORY: ComponentConfig(
            ComponentType.REPOSITORY,
            log_level=LogLevel.DEBUG  # Always debug for repositories to trace storage calls
        ),
        ComponentType.FACTORY: ComponentConfig(ComponentType.FACTORY, log_level=_default_level),
        ComponentType.CONFIG: ComponentConfig(ComponentType.CONFIG, log_level=_default_level),
    }

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        context: Optional[LogContext] = None,
        config: Optional[ComponentConfig] = None
    ) -> logging.LoggerAdapter:
        """
        Create a logger for a specific component.

        Args:
            component_type: Type of component
            name: Component name (e.g., "CatalogIngestService")
            context: Optional log context for correlation
            config: Optional custom configuration

        Returns:
            Logger adapter that injects context as custom dimensions
        """
        if config is None:
            config = cls.DEFAULT_CONFIGS.get(
                component_type,
                ComponentConfig(component_type=component_type)
            )

        logger_name = f"{component_type.value}.{name}"
        logger = logging.getLogger(logger_name)

        if isinstance(config.log_level, str):
            log_level = LogLevel.from_string(config.log_level).to_python_level()
        else:
            log_level = config.log_level.to_python_level()
        logger.setLevel(log_level)

        # Only add our JSON handler once per named logger
        has_json_handler = any(
            isinstance(h.formatter, JSONFormatter) for h in logger.handlers
        )
        if not has_json_handler:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(log_level)
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)

        # Allow propagation to Azure's root logger for Application Insights
        logger.propagate = True

        dimensions = context.to_dict() if context else {}
        dimensions['component_type'] = component_type.value
        dimensions['component_name'] = name
        return _ContextAdapter(logger, dimensions)

    @classmethod
    def create_with_context(
        cls,
        component_type: ComponentType,
        name: str,
        invocation_id: Optional[str] = None,
        source_container: Optional[str] = None,
        archive_key: Optional[str] = None,
    ) -> logging.LoggerAdapter:
        """
        Create logger with invocation context.

        Convenience method for the common correlation fields.
        """
        context = LogContext(
            invocation_id=invocation_id,
            source_container=source_container,
            archive_key=archive_key,
        ) if any([invocation_id, source_container, archive_key]) else None

        return cls.create_logger(component_type=component_type, name=name, context=context)


class _ContextAdapter(logging.LoggerAdapter):
    """Merge fixed dimensions with any custom_dimensions passed in extra."""

    def process(self, msg, kwargs):
        extra = kwargs.get('extra') or {}
        custom_dims = dict(self.extra)
        if 'custom_dimensions' in extra:
            custom_dims.update(extra['custom_dimensions'])
        extra['custom_dimensions'] = custom_dims
        kwargs['extra'] = extra
        return msg, kwargs


# ============================================================================
# EXCEPTION DECORATOR - Automatic exception logging with context
# ============================================================================

def log_exceptions(component_type: Optional[ComponentType] = None,
                   component_name: Optional[str] = None,
                   logger: Optional[logging.LoggerAdapter] = None):
    """
    Decorator to automatically log exceptions with full context.

    Can be used in three ways:
    1. With existing logger: @log_exceptions(logger=my_logger)
    2. With component info: @log_exceptions(ComponentType.SERVICE, "MyService")
    3. Simple: @log_exceptions() - uses function module and name

    The exception is always re-raised.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if logger:
                log = logger
            elif component_type and component_name:
                log = LoggerFactory.create_logger(component_type, component_name)
            else:
                log = LoggerFactory.create_logger(
                    ComponentType.SERVICE,
                    func.__module__ or "unknown"
                )

            try:
                return func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"Exception in {func.__name__}",
                    exc_info=True,
                    extra={
                        'custom_dimensions': {
                            'function_name': func.__name__,
                            'function_module': func.__module__,
                            'exception_type': type(e).__name__,
                            'exception_message': str(e),
                            'traceback': traceback.format_exc()
                        }
                    }
                )
                raise
        return wrapper
    return decorator
