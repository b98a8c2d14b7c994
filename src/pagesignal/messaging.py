# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Request/response calling convention used by the host messaging layer.

    {"action": "ping"}                   → {"status": "pong"}
    {"action": "analyzePage"}            → {"analysis": {...}} | {"error": "..."}
    {"action": "extractJavaScriptAPIs"}  → {"apis": {...}}     | {"error": "..."}

Anything else gets no response (None), matching a listener that does not
claim the message. The dispatcher holds no state; guarding against
re-registration or overlapping calls is the transport's job.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .analyzer import analyze_page
from .document import PageDocument
from .endpoint_extractor import extract_javascript_apis
from .errors import InvalidDocumentError
from .serializer import apis_to_dict, to_dict

logger = logging.getLogger(__name__)


class Action(StrEnum):
    PING = "ping"
    ANALYZE_PAGE = "analyzePage"
    EXTRACT_JAVASCRIPT_APIS = "extractJavaScriptAPIs"


class MessageRequest(BaseModel):
    """Incoming message; extra keys are tolerated and ignored."""

    model_config = ConfigDict(extra="ignore")

    action: str


def _error(exc: Exception) -> dict[str, str]:
    return {"error": str(exc) or type(exc).__name__}


def _extract_apis(document: PageDocument | None) -> dict[str, Any]:
    if not isinstance(document, PageDocument):
        raise InvalidDocumentError("No document available for API extraction")
    return apis_to_dict(extract_javascript_apis(document))


def handle_message(request: Any, document: PageDocument | None) -> dict[str, Any] | None:
    """Dispatch one message against ``document``. Returns the response or None."""
    try:
        action = MessageRequest.model_validate(request).action
    except ValidationError:
        logger.warning("Ignoring malformed message: %r", request)
        return None

    if action == Action.PING:
        return {"status": "pong"}

    if action == Action.ANALYZE_PAGE:
        try:
            return {"analysis": to_dict(analyze_page(document))}
        except Exception as e:
            logger.error("analyzePage failed: %s", e, exc_info=True)
            return _error(e)

    if action == Action.EXTRACT_JAVASCRIPT_APIS:
        try:
            return {"apis": _extract_apis(document)}
        except Exception as e:
            logger.error("extractJavaScriptAPIs failed: %s", e, exc_info=True)
            return _error(e)

    logger.warning("Unrecognized action: %s", action)
    return None
