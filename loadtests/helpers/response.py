"""Response error extraction for load test observability.

Parses Flash Tans API error responses into human-readable messages. Every
error the API returns has the shape ``{"error": "msg"}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Unparseable bodies fall back to the raw text.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON: return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "error" in body:
        return str(body["error"])

    # Unknown shape: stringify and truncate
    return str(body)[:300]


def is_stock_refusal(response: Response) -> bool:
    """True for the 400 the API returns when an order asks for more than is in stock."""
    return response.status_code == 400 and extract_error_detail(response).startswith("Insufficient stock for ")
