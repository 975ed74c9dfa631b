# tabiplan/api/services/suggestion_service.py
"""Runs suggestion requests against the gateway, one at a time per workspace."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from tabiplan.api.errors import GatewayError, SuggestionInFlightError, ValidationError
from tabiplan.api.llm import SuggestionGateway, format_gateway_error
from tabiplan.api.models import SuggestionMode, SuggestionRequest
from tabiplan.api.prompts import SuggestionRequestBuilder
from tabiplan.api.workspace import Workspace

logger = logging.getLogger(__name__)


class SuggestionService:
    """Dispatches gateway calls on a worker pool.

    A workspace may have at most one request in flight. There is no
    cancellation and no timeout here; the call runs until the gateway
    returns or fails.
    """

    def __init__(self, gateway: SuggestionGateway,
                 executor: Optional[ThreadPoolExecutor] = None,
                 max_workers: int = 4):
        self.gateway = gateway
        self.executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="suggestion",
        )

    def request_suggestion(self, workspace: Workspace, problem: str, constraints: str,
                           mode=SuggestionMode.SCHEDULE) -> Future:
        """Validate input and start generating a suggestion.

        Args:
            workspace: Workspace whose itinerary is sent
            problem: What went wrong
            constraints: Requirements for the new plan
            mode: ``schedule`` or ``spots``

        Returns:
            Future resolving to the final shell state dict

        Raises:
            ValidationError: Input rejected; recorded as the workspace error
            SuggestionInFlightError: A request is already loading
        """
        with workspace.lock:
            if workspace.state.is_loading:
                raise SuggestionInFlightError(
                    f"Suggestion already in progress for {workspace.workspace_id}"
                )

            try:
                request = SuggestionRequestBuilder.build(
                    workspace.store.snapshot(), problem, constraints, mode
                )
            except ValidationError as e:
                workspace.state.set_error(e.message)
                logger.warning(f"Suggestion input rejected for {workspace.workspace_id}: {e.code}")
                raise

            workspace.state.start_loading(request.mode)

        logger.info(
            f"Dispatching {request.mode.value} suggestion for {workspace.workspace_id} "
            f"({len(request.itinerary)} items)"
        )
        return self.executor.submit(self._run, workspace, request)

    def _run(self, workspace: Workspace, request: SuggestionRequest) -> dict:
        try:
            text = self.gateway.invoke(request)
        except GatewayError as e:
            logger.error(f"Suggestion failed for {workspace.workspace_id}: {e}")
            with workspace.lock:
                workspace.state.set_error(format_gateway_error(e))
                return workspace.state.to_dict()
        except Exception as e:
            # A gateway that raises something else must not leave the page loading.
            logger.exception(f"Unexpected gateway failure for {workspace.workspace_id}")
            with workspace.lock:
                workspace.state.set_error(format_gateway_error(GatewayError(str(e))))
                return workspace.state.to_dict()

        with workspace.lock:
            workspace.state.set_suggestion(text)
            logger.info(f"Suggestion ready for {workspace.workspace_id} ({len(text)} chars)")
            return workspace.state.to_dict()

    def shutdown(self, wait: bool = True):
        self.executor.shutdown(wait=wait)
