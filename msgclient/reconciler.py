"""Turn provider responses into typed results or MessagingErrors.

Batch sends are classified with `classify()`:

- ACCEPTED: no failed messages
- PARTIALLY_FAILED: some messages failed; returned as data, never raised
- TOTALLY_FAILED: the failure list is non-empty and as long as
  `groupInfo.count.total`; raised as MESSAGE_NOT_RECEIVED

Equality, not "any failure", is what makes a batch totally failed: a single
message send with one failure is total, a batch of five with one failure is
partial.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from msgclient.types import (
    BatchSendResult,
    ErrorBody,
    ErrorKind,
    GatewayResponse,
    MessagingError,
    Outcome,
    OutcomeStatus,
    WireModel,
)

logger = logging.getLogger("msgclient.reconciler")

M = TypeVar("M", bound=WireModel)

SERVER_ERROR_MESSAGE = "Server error encountered"
EMPTY_RESPONSE_MESSAGE = "No response body received from the server"
MALFORMED_RESPONSE_MESSAGE = "Unexpected response body from the server"
NOT_RECEIVED_MESSAGE = "The provider did not accept any of the submitted messages"

DEFAULT_ERROR_KINDS: Dict[str, ErrorKind] = {
    "ValidationError": ErrorKind.BAD_REQUEST,
    "FailedToAddMessage": ErrorKind.BAD_REQUEST,
    "InvalidApiKey": ErrorKind.INVALID_API_KEY,
}


class ErrorCodeTable:
    """Maps provider `errorCode` values to ErrorKinds.

    The provider's code list is only partly documented, so the defaults can be
    extended or overridden per instance without touching the reconciler.
    Kinds may be given as ErrorKind members, their values ("BadRequest") or
    their names ("BAD_REQUEST").
    """

    def __init__(self, overrides: Optional[Mapping[str, Union[ErrorKind, str]]] = None) -> None:
        self._kinds: Dict[str, ErrorKind] = dict(DEFAULT_ERROR_KINDS)
        for code, kind in (overrides or {}).items():
            self.register(code, kind)

    def get(self, code: Optional[str]) -> Optional[ErrorKind]:
        if code is None:
            return None
        return self._kinds.get(code)

    def register(self, code: str, kind: Union[ErrorKind, str]) -> None:
        self._kinds[code] = _coerce_kind(kind)

    def __contains__(self, code: object) -> bool:
        return code in self._kinds

    def as_dict(self) -> Dict[str, ErrorKind]:
        return dict(self._kinds)


def _coerce_kind(kind: Union[ErrorKind, str]) -> ErrorKind:
    if isinstance(kind, ErrorKind):
        return kind
    try:
        return ErrorKind(kind)
    except ValueError:
        pass
    try:
        return ErrorKind[kind.upper()]
    except KeyError:
        raise ValueError(f"Unknown error kind: {kind}") from None


def classify(result: BatchSendResult) -> Outcome:
    """Classify a successful batch response without raising."""
    total = result.count.total
    failed = result.failed_message_list
    if failed and len(failed) == total:
        status = OutcomeStatus.TOTALLY_FAILED
    elif failed:
        status = OutcomeStatus.PARTIALLY_FAILED
    else:
        status = OutcomeStatus.ACCEPTED
    return Outcome(status=status, result=result)


def parse_error_body(response: GatewayResponse) -> ErrorBody:
    """Extract `{errorCode, errorMessage}`, falling back to the raw text."""
    if isinstance(response.body, dict):
        try:
            parsed = ErrorBody.model_validate(response.body)
        except ValidationError:
            parsed = None
        if parsed is not None and (parsed.error_code or parsed.error_message):
            return parsed
    return ErrorBody(error_message=response.text.strip() or SERVER_ERROR_MESSAGE)


class ResponseReconciler:
    def __init__(self, error_codes: Optional[ErrorCodeTable] = None) -> None:
        self.error_codes = error_codes or ErrorCodeTable()

    def error_for(
        self,
        response: GatewayResponse,
        *,
        kind: Optional[ErrorKind] = None,
    ) -> MessagingError:
        """Build the error for a non-2xx response.

        `kind` forces the error kind (used by upload); otherwise it comes from
        the code table, falling back to UNKNOWN_PROVIDER_ERROR.
        """
        body = parse_error_body(response)
        resolved = kind or self.error_codes.get(body.error_code) or ErrorKind.UNKNOWN_PROVIDER_ERROR
        message = body.error_message or body.error_code or SERVER_ERROR_MESSAGE
        logger.debug(
            "provider error status=%s code=%s kind=%s",
            response.status_code,
            body.error_code,
            resolved.value,
        )
        return MessagingError(
            resolved,
            message,
            error_code=body.error_code,
            status_code=response.status_code,
        )

    def unwrap(
        self,
        response: GatewayResponse,
        model: Type[M],
        *,
        error_kind: Optional[ErrorKind] = None,
    ) -> M:
        """Return the parsed body of a simple (non-batch) call or raise."""
        if not response.is_success:
            raise self.error_for(response, kind=error_kind)
        if response.body is None:
            raise MessagingError(
                ErrorKind.EMPTY_RESPONSE,
                EMPTY_RESPONSE_MESSAGE,
                status_code=response.status_code,
            )
        try:
            return model.model_validate(response.body)
        except ValidationError as exc:
            logger.warning("malformed %s body: %s", model.__name__, exc)
            raise MessagingError(
                ErrorKind.UNKNOWN_PROVIDER_ERROR,
                f"{MALFORMED_RESPONSE_MESSAGE}: {exc.error_count()} invalid field(s)",
                status_code=response.status_code,
            ) from exc

    def reconcile_batch(self, response: GatewayResponse) -> BatchSendResult:
        """Return the batch result unless every message was rejected."""
        result = self.unwrap(response, BatchSendResult)
        outcome = classify(result)
        if outcome.status is OutcomeStatus.TOTALLY_FAILED:
            raise MessagingError(
                ErrorKind.MESSAGE_NOT_RECEIVED,
                NOT_RECEIVED_MESSAGE,
                status_code=response.status_code,
                failed_messages=outcome.failed_messages,
            )
        if outcome.status is OutcomeStatus.PARTIALLY_FAILED:
            logger.warning(
                "batch partially failed: %d of %d messages rejected",
                len(outcome.failed_messages),
                result.count.total,
            )
        return result
