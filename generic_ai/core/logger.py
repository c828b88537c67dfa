"""Centralized logging with OpenTelemetry trace context"""

import logging
import json
import sys
import os
from datetime import datetime, timezone
from typing import Dict, Any
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


class CentralizedLogger:
    """Named logger that stamps every record with the current trace context"""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = logging.getLogger(f"generic_ai.{service_name}")

        log_level_str = os.getenv('GENERIC_AI_LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)
        self.logger.setLevel(log_level)

        # Loggers are process-wide; only the first instance per name attaches handlers
        if self.logger.handlers:
            return

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(self._get_console_formatter())

        json_handler = logging.StreamHandler(sys.stderr)
        json_handler.setLevel(log_level)
        json_handler.setFormatter(self._get_json_formatter())

        self.logger.addHandler(console_handler)
        self.logger.addHandler(json_handler)
        self.logger.propagate = False

    def _get_console_formatter(self) -> logging.Formatter:
        """Human-readable console format with colored level"""
        class ConsoleFormatter(logging.Formatter):
            COLORS = {
                'DEBUG': '\033[36m',
                'INFO': '\033[32m',
                'WARNING': '\033[33m',
                'ERROR': '\033[31m',
                'CRITICAL': '\033[35m',
            }
            RESET = '\033[0m'

            def format(self, record):
                record.trace_id = getattr(record, 'trace_id', 'no-trace')
                levelname = record.levelname
                if levelname in self.COLORS:
                    record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
                formatted = super().format(record)
                # Other handlers see the same record
                record.levelname = levelname
                return formatted

        return ConsoleFormatter(
            '%(asctime)s | %(levelname)-8s | %(name)-28s | %(message)s',
            datefmt='%H:%M:%S'
        )

    def _get_json_formatter(self) -> logging.Formatter:
        """JSON format for observability platforms"""
        class JsonFormatter(logging.Formatter):
            def format(self, record):
                log_obj = {
                    'timestamp': datetime.now(timezone.utc).isoformat(),
                    'level': record.levelname,
                    'service': record.name,
                    'message': record.getMessage(),
                    'trace_id': getattr(record, 'trace_id', None),
                    'span_id': getattr(record, 'span_id', None),
                    'provider': getattr(record, 'provider', None),
                    'model': getattr(record, 'model', None),
                }
                return json.dumps(log_obj)
        return JsonFormatter()

    def _inject_trace_context(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Inject current trace context into log extras"""
        kwargs['extra'] = kwargs.get('extra', {})

        span = trace.get_current_span()
        if span and span.is_recording():
            span_context = span.get_span_context()
            kwargs['extra']['trace_id'] = format(span_context.trace_id, '032x')
            kwargs['extra']['span_id'] = format(span_context.span_id, '016x')
        else:
            kwargs['extra']['trace_id'] = 'no-trace'
            kwargs['extra']['span_id'] = 'no-span'

        return kwargs

    def debug(self, message: str, **kwargs):
        kwargs = self._inject_trace_context(kwargs)
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        kwargs = self._inject_trace_context(kwargs)
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        kwargs = self._inject_trace_context(kwargs)
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        kwargs = self._inject_trace_context(kwargs)
        self.logger.error(message, **kwargs)

        span = trace.get_current_span()
        if span and span.is_recording():
            span.set_status(Status(StatusCode.ERROR, message))
