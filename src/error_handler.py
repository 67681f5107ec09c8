"""Failure normalization for the submit entrypoint."""
import logging

from src.integrations.contracts.dark_pool import EntrypointResponse

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_transport_failure(self, error: str) -> EntrypointResponse:
        logger.error("Error forwarding to backend: %s", error)
        return EntrypointResponse.failure(f"Failed to submit transaction: {error}")

    def handle_backend_rejection(self, status_code: int, message: str) -> EntrypointResponse:
        logger.warning("Backend rejected submission: status=%s message=%s", status_code, message)
        return EntrypointResponse.failure(message)

    def handle_malformed_response(self, status_code: int, detail: str) -> EntrypointResponse:
        logger.error("Unreadable backend response (status=%s): %s", status_code, detail)
        return EntrypointResponse.failure(f"Failed to submit transaction: {detail}")
