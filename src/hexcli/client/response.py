"""Rendering of failed API calls.

:func:`print_error_result` writes whatever detail a failed call carries to
stderr before the caller raises. The API reports failures as JSON with a
``message`` and, for validation failures, an ``errors`` object mapping
field names to messages (possibly nested).

See Also:
    :mod:`hexcli.output` -- the output manager that renders messages.
"""

from __future__ import annotations

from typing import Any, Union

import httpx

from hexcli.output import get_output


def print_error_result(result: Union[httpx.Response, Exception]) -> None:
    """Print the detail of a failed call to stderr.

    Args:
        result: The non-successful :class:`httpx.Response`, or the exception
            raised while sending the request.
    """
    output = get_output()

    if isinstance(result, Exception):
        output.info(str(result))
        return

    data = extract_response_data(result)
    if isinstance(data, dict):
        message = data.get("message")
        if message:
            output.info(str(message))
        errors = data.get("errors")
        if errors:
            for line in _pretty_errors(errors):
                output.info(line)
    elif isinstance(data, str) and data.strip():
        output.info(data.strip())

    output.info(f"HTTP status code: {result.status_code}")


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first, then falls back to the raw
    text. Returns ``None`` for responses with no content.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        return response.text


def _pretty_errors(errors: Any, depth: int = 0) -> list[str]:
    """Flatten a (possibly nested) ``errors`` object into indented lines."""
    indent = "  " * depth
    if not isinstance(errors, dict):
        return [f"{indent}{errors}"]

    lines: list[str] = []
    for key, value in errors.items():
        if isinstance(value, dict):
            lines.append(f"{indent}{key}:")
            lines.extend(_pretty_errors(value, depth + 1))
        else:
            lines.append(f"{indent}{key}: {value}")
    return lines
