"""
Microblog Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the few ways a request can fail.
How:   Each exception carries a client-safe `message` and an optional
       `context` dict. Global handlers registered in main.py turn them into
       plain-text responses; `context` is only ever written to the log.
Who:   Raised by the posts route, the post service, and the store.

Exception Hierarchy:
    MicroblogError (base)          → 500 Internal Server Error
    ├── ValidationError            → 400 Bad Request
    ├── MalformedRequestError      → 500 Internal Server Error
    └── StoreError                 → 500 Internal Server Error

Note on MalformedRequestError:
    An unreadable or non-JSON body answers 500, not 400. Existing clients
    depend on that status, so it is kept as-is.
"""

from typing import Any, Dict, Optional


class MicroblogError(Exception):
    """
    Base exception for all Microblog application errors.

    Attributes:
        message:  Response body sent to the client
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MicroblogError):
    """
    Raised when a create-post payload has an empty title or content.

    HTTP: 400 Bad Request. The message is specific and safe to show.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Title and content cannot be empty",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MalformedRequestError(MicroblogError):
    """
    Raised when the request body cannot be read or is not valid JSON.

    HTTP: 500 with a fixed message; the parser error goes to the log.
    """

    def __init__(
        self,
        message: str = "Failed to read request body",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(MicroblogError):
    """
    Raised when the posts store fails to insert or fetch.

    What:    A statement failed (I/O error, constraint violation, locked
             database) or a stored row could not be mapped back to a Post.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always the generic
        per-operation string. The driver error text lives in `context`
        and is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
