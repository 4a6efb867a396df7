"""
Langfuse tracing integration for expense_filter.

Uploads are traced so ingestion failures and file sizes can be inspected in
Langfuse. Tracing is enabled only when a public key is configured, and a
tracing failure never fails the upload itself.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from langfuse import Langfuse
from langfuse.types import TraceContext

from .config import Settings

logger = logging.getLogger(__name__)


@dataclass
class TraceHandle:
    """Lightweight wrapper for Langfuse trace context."""

    client: Any
    trace_context: TraceContext
    root_span: Optional[object] = None

    def end(self):
        """End the root span if it is still open."""
        if self.root_span:
            try:
                self.root_span.end()
            except Exception:
                logger.warning("Failed to end root span", exc_info=True)
            finally:
                self.root_span = None


class LangfuseTracer:
    """Wrapper for the Langfuse client configured from Settings."""

    def __init__(self, settings: Settings):
        self.enabled = settings.langfuse_public_key is not None
        self.client = None

        if self.enabled:
            try:
                self.client = Langfuse(
                    public_key=settings.langfuse_public_key,
                    secret_key=settings.langfuse_secret_key,
                    host=settings.langfuse_host,
                    debug=settings.langfuse_debug,
                )
                logger.info("Langfuse client initialized with host: %s", settings.langfuse_host)
            except Exception:
                logger.warning("Failed to initialize Langfuse", exc_info=True)
                self.enabled = False

    def is_enabled(self) -> bool:
        """Check if Langfuse tracing is enabled and available."""
        return self.enabled

    def create_trace(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[TraceHandle]:
        """
        Create a new trace for monitoring an operation.

        Args:
            name: Name of the operation (e.g., "upload_csv")
            metadata: Optional metadata dictionary

        Returns:
            Trace handle or None if tracing is disabled
        """
        if not self.enabled or not self.client:
            return None

        try:
            trace_id = self.client.create_trace_id()
            trace_context = TraceContext(trace_id=trace_id)
            root_span = self.client.start_span(
                trace_context=trace_context,
                name=name,
                metadata=metadata or {},
            )
            return TraceHandle(
                client=self.client, trace_context=trace_context, root_span=root_span
            )
        except Exception:
            logger.warning("Failed to create trace %s", name, exc_info=True)
            return None

    def add_span(
        self,
        trace: Optional[TraceHandle],
        name: str,
        input_text: Optional[str] = None,
        output_text: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a span to the trace.

        Args:
            trace: Handle from create_trace()
            name: Name of the span (e.g., "ingest_csv")
            input_text: Optional input data
            output_text: Optional output data
            metadata: Optional additional metadata
        """
        if not trace or not self.client:
            return

        try:
            span = self.client.start_span(
                trace_context=trace.trace_context,
                name=name,
                input=input_text or "",
                metadata=metadata or {},
            )
            if output_text:
                span.update(output=output_text)
            span.end()
        except Exception:
            logger.warning("Failed to add span %s to trace", name, exc_info=True)

    def end_trace(self, trace: Optional[TraceHandle]) -> None:
        """Finalize a trace and flush pending events."""
        if not trace:
            return
        trace.end()
        try:
            if self.client:
                self.client.flush()
        except Exception:
            logger.warning("Failed to flush trace", exc_info=True)


def trace_ingest(
    tracer: LangfuseTracer,
    file_name: str,
    size: int,
    outcome: str,
    rows: Optional[int] = None,
) -> None:
    """Record one upload attempt and its outcome as an ingest_csv span."""
    if not tracer.is_enabled():
        return
    metadata = {"file_name": file_name, "bytes": size}
    trace = tracer.create_trace("upload_csv", metadata=metadata)
    tracer.add_span(
        trace,
        "ingest_csv",
        input_text=file_name,
        output_text=outcome,
        metadata={"rows": rows} if rows is not None else None,
    )
    tracer.end_trace(trace)
