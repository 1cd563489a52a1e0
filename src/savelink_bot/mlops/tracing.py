"""
MLflow tracing integration for request observability.
Subscribes to the orchestrator's lifecycle hooks and records one span per finished request.
"""
import logging
from typing import Optional, Dict, Any

import mlflow

from ..errors import BotFailure
from ..schemas.command import CommandRequest, IssueReference

logger = logging.getLogger(__name__)

SPAN_NAME = "save_link.request"


class MLflowTracer:
    """Records save-link outcomes as MLflow spans. Never raises into the pipeline."""

    def __init__(self, tracking_uri: str, enabled: bool = True):
        self.enabled = enabled
        if self.enabled:
            try:
                mlflow.set_tracking_uri(tracking_uri)
                logger.info("MLflow tracing enabled")
            except Exception as e:
                logger.warning(f"Failed to initialize MLflow tracing: {e}")
                self.enabled = False
        else:
            logger.info("MLflow tracing disabled")

    def _record(
        self,
        request: CommandRequest,
        outcome: str,
        duration_ms: int,
        extra: Optional[Dict[str, Any]] = None
    ):
        if not self.enabled:
            return

        attributes = {
            "url": request.url,
            "requester_id": request.requester_id,
            "has_title_override": bool(request.title_override),
            "outcome": outcome,
            "latency_ms": duration_ms,
        }
        if extra:
            attributes.update(extra)

        try:
            with mlflow.start_span(name=SPAN_NAME, span_type="CHAIN") as span:
                span.set_inputs({"url": request.url})
                span.set_attributes(attributes)
        except Exception as e:
            logger.warning(f"Tracing span failed for {SPAN_NAME}: {e}")

    def on_request_started(self, request: CommandRequest) -> None:
        logger.debug(f"Tracing save-link request for {request.url}")

    def on_request_succeeded(self, request: CommandRequest, reference: IssueReference, duration_ms: int) -> None:
        self._record(request, "success", duration_ms, {"issue_reference": reference})

    def on_request_failed(self, request: CommandRequest, failure: BotFailure, duration_ms: int) -> None:
        self._record(
            request,
            "error",
            duration_ms,
            {"failure_kind": failure.kind.value, "error": failure.message},
        )
