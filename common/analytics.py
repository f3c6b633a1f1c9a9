# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


import functools
import logging
import json
import os
import time
from contextlib import contextmanager

from google.cloud import logging as cloud_logging


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON."""

    def format(self, record):
        log_object = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        if hasattr(record, "extra_data"):
            log_object.update(record.extra_data)
        return json.dumps(log_object)


def get_logger(name: str):
    """Creates and configures a logger."""
    logger = logging.getLogger(name)
    # Prevent duplicate handlers on repeated calls
    if not logger.handlers:
        logger.setLevel(logging.INFO)

        # Cloud Run sets K_SERVICE; its logging handler parses our JSON fields.
        if os.environ.get("K_SERVICE"):
            client = cloud_logging.Client()
            handler = client.get_default_handler()
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(JsonFormatter())

        logger.addHandler(handler)
    return logger


analytics_logger = get_logger("blueprint_studio.analytics")


def log_page_view(page_name: str, session_id: str = None):
    """Logs a page view event."""
    extra_data = {
        "event_type": "page_view",
        "page_name": page_name,
        "session_id": session_id,
    }
    analytics_logger.info(f"Page view: {page_name}", extra={'extra_data': extra_data})


def log_ui_click(element_id: str, page_name: str, session_id: str = None, extras: dict = None):
    """Logs a UI click event."""
    extra_data = {
        "event_type": "ui_click",
        "element_id": element_id,
        "page_name": page_name,
        "session_id": session_id,
    }
    if extras:
        extra_data.update(extras)
    analytics_logger.info(f"UI Click: {element_id} on {page_name}", extra={'extra_data': extra_data})


def log_model_call(model_name: str, status: str, duration_ms: float = 0, details: dict = None):
    """Logs a generative model call event."""
    extra_data = {
        "event_type": "model_call",
        "model_name": model_name,
        "status": status,  # "success" or "failure"
        "duration_ms": round(duration_ms, 2),
        "details": details or {},
    }
    analytics_logger.info(f"Model Call: {model_name} ({status})", extra={'extra_data': extra_data})


def track_click(element_id: str, page_name: str):
    """Decorator to log a UI click event on an event handler."""
    def decorator(handler_function):
        @functools.wraps(handler_function)
        def wrapper(*args, **kwargs):
            log_ui_click(element_id=element_id, page_name=page_name)
            return handler_function(*args, **kwargs)
        return wrapper
    return decorator


@contextmanager
def track_model_call(model_name: str, **kwargs):
    """Context manager to log the duration and status of a model call."""
    start_time = time.time()
    try:
        yield
        duration_ms = (time.time() - start_time) * 1000
        log_model_call(model_name, status="success", duration_ms=duration_ms, details=kwargs)
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        log_model_call(model_name, status="failure", duration_ms=duration_ms, details={"error": str(e), **kwargs})
        raise
