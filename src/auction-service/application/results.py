"""Operation results not covered by the neuroglia handler helpers."""

from typing import Any

from neuroglia.core import OperationResult


def unprocessable_entity(detail: str) -> OperationResult[Any]:
    """Return an unprocessable entity (422) result for invalid input."""
    return OperationResult("Unprocessable Entity", 422, detail=detail, type="https://www.w3.org/Protocols/HTTP/HTRESP.html#:~:text=Unprocessable%20Entity")


def service_unavailable(detail: str) -> OperationResult[Any]:
    """Return a service unavailable (503) result for an unreachable dependency."""
    return OperationResult("Service Unavailable", 503, detail=detail, type="https://www.w3.org/Protocols/HTTP/HTRESP.html#:~:text=Service%20Unavailable")
