"""Save-link command orchestration.

Runs one command end to end: permission check, extraction, issue filing,
and exactly one reply. Every failure is mapped to a reply instead of being raised.
"""

import time
from typing import Callable, Optional, Protocol, Sequence

from ..errors import BotFailure, FailureKind, format_failure, permission_denied_message
from ..log import get_logger
from ..schemas.command import CommandRequest, ExtractionResult, IssueRecord, IssueReference

logger = get_logger("pipeline")

Reply = Callable[[str], None]


class Extractor(Protocol):
    def extract(self, url: str) -> ExtractionResult:
        ...

class IssueFiler(Protocol):
    def file_issue(self, record: IssueRecord) -> IssueReference:
        ...

class PermissionChecker(Protocol):
    def has_role(self, user_id: str, role_name: str) -> bool:
        ...

class PipelineObserver(Protocol):
    """Lifecycle hooks for metrics/tracing collectors."""

    def on_request_started(self, request: CommandRequest) -> None:
        ...

    def on_request_succeeded(self, request: CommandRequest, reference: IssueReference, duration_ms: int) -> None:
        ...

    def on_request_failed(self, request: CommandRequest, failure: BotFailure, duration_ms: int) -> None:
        ...


def success_message(reference: IssueReference) -> str:
    return f"Resource saved successfully! Tracking issue created: {reference}"


def build_issue_record(request: CommandRequest, extraction: ExtractionResult) -> IssueRecord:
    """Title override wins when non-empty; everything else comes from the extraction."""
    title = request.title_override if request.title_override else extraction.title
    return IssueRecord(
        title=title,
        description=extraction.description,
        url=extraction.source_url,
        submitted_by=request.submitted_by,
    )


class SaveLinkOrchestrator:
    def __init__(
        self,
        extractor: Extractor,
        filer: IssueFiler,
        permissions: PermissionChecker,
        role_name: str,
        observers: Sequence[PipelineObserver] = (),
    ):
        self.extractor = extractor
        self.filer = filer
        self.permissions = permissions
        self.role_name = role_name
        self.observers = tuple(observers)

    def handle(self, request: CommandRequest, reply: Reply) -> None:
        """
        Process one command and reply once.
        Never raises: failures end up in the reply, reply failures in the log.
        """
        logger.info(f"Processing save-link from {request.requester_id} for URL: {request.url}")
        started = time.monotonic()
        self._notify("on_request_started", request)

        reference: Optional[IssueReference] = None
        failure: Optional[BotFailure] = None
        try:
            reference = self._run(request)
        except Exception as e:
            failure = BotFailure.from_exception(e)

        duration_ms = int((time.monotonic() - started) * 1000)
        if failure is None:
            logger.info(f"✓ Saved {request.url} as {reference}")
            self._notify("on_request_succeeded", request, reference, duration_ms)
            self._send_reply(reply, success_message(reference))
        else:
            if failure.kind is FailureKind.UNKNOWN:
                logger.error(f"Unexpected error processing {request.url}", exc_info=failure.cause)
            else:
                logger.warning(f"save-link failed ({failure.kind.value}): {failure.message}")
            self._notify("on_request_failed", request, failure, duration_ms)
            self._send_reply(reply, format_failure(failure))

    def _run(self, request: CommandRequest) -> IssueReference:
        # 1. Permission, before any network call to the page
        if not self.permissions.has_role(request.requester_id, self.role_name):
            raise BotFailure.permission(permission_denied_message(self.role_name))

        # 2. Extract
        extraction = self.extractor.extract(request.url)

        # 3. Build record
        record = build_issue_record(request, extraction)

        # 4. File
        try:
            return self.filer.file_issue(record)
        except BotFailure:
            raise
        except Exception as e:
            raise BotFailure.filing(str(e) or e.__class__.__name__, cause=e) from e

    def _send_reply(self, reply: Reply, text: str) -> None:
        try:
            reply(text)
        except Exception:
            logger.exception("Failed to send reply")

    def _notify(self, hook: str, *args) -> None:
        for observer in self.observers:
            try:
                getattr(observer, hook)(*args)
            except Exception as e:
                logger.warning(f"Observer {observer.__class__.__name__}.{hook} failed: {e}")
