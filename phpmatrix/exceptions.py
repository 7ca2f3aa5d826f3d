"""
Exceptions raised by phpmatrix.

Every error derives from :class:`PhpMatrixError`. Besides the message,
errors carry a ``details`` mapping that the CLI logs at debug level and
appends to the rendered message.

The resolver itself only ever raises :class:`NoValidVersionsError`; the
remaining classes come from the manifest reader, the release catalog and
configuration loading.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

#: Response bodies longer than this are cut in ``details``.
MAX_DETAIL_LENGTH = 200


def _compact(**values: Any) -> Dict[str, Any]:
    """Drop ``None`` entries so ``details`` only lists what is known."""
    return {key: value for key, value in values.items() if value is not None}


class PhpMatrixError(Exception):
    """Root of the phpmatrix exception tree.

    Args:
        message: Text shown to the user.
        details: Extra context rendered as ``key=value`` pairs.
    """

    __slots__ = ("message", "details")

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        if self.details:
            pairs = ", ".join(f"{key}={value}" for key, value in self.details.items())
            return f"{self.message} ({pairs})"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, details={self.details!r})"


class NoValidVersionsError(PhpMatrixError):
    """Nothing is left after filtering the catalog and matching the constraint.

    The message is printed as is, so the constraint is kept as an
    attribute and not in ``details``.
    """

    __slots__ = ("constraint",)

    def __init__(
        self,
        message: str = "No valid versions found",
        *,
        constraint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.constraint = constraint


class ParseError(PhpMatrixError):
    """``composer.json`` is not valid JSON or has an unexpected shape."""

    __slots__ = ("file_path", "reason")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message, _compact(file=file_path, reason=reason))
        self.file_path = file_path
        self.reason = reason


class NetworkError(PhpMatrixError):
    """An HTTP request failed or returned something unusable.

    Args:
        message: Error description.
        url: Requested URL.
        status_code: HTTP status, when a response arrived.
        response_body: Body of that response; cut to
            :data:`MAX_DETAIL_LENGTH` characters in ``details``.
    """

    __slots__ = ("url", "status_code", "response_body")

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        body = response_body
        if body is not None and len(body) > MAX_DETAIL_LENGTH:
            body = body[:MAX_DETAIL_LENGTH] + "..."

        super().__init__(
            message,
            _compact(url=url, status_code=status_code, response=body),
        )
        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class CatalogError(NetworkError):
    """The release catalog could not be loaded or has an invalid layout.

    ``catalog_url`` is either the endpoint or the local file that was
    read; remaining keyword arguments go to :class:`NetworkError`.
    """

    __slots__ = ("catalog_url",)

    def __init__(
        self,
        message: str,
        *,
        catalog_url: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.catalog_url = catalog_url
        if catalog_url is not None:
            self.details["catalog"] = catalog_url


class FileOperationError(PhpMatrixError):
    """Reading, appending to or locating a file failed.

    Args:
        message: Error description.
        file_path: File involved.
        operation: ``read``, ``append`` or ``validate``.
        original_error: Underlying exception, if any.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message,
            _compact(
                path=file_path,
                operation=operation,
                original_error=str(original_error) if original_error else None,
            ),
        )
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(PhpMatrixError):
    """A configuration file is missing, unreadable or holds invalid values."""

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        super().__init__(message, _compact(config=config_path, option=option))
        self.config_path = config_path
        self.option = option
