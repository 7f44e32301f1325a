"""Generic async API client used by cloudtail service clients."""

import uuid
from typing import Any, Dict, Optional

import httpx
from opentelemetry import trace
from opentelemetry.propagate import inject


def error_message(response: httpx.Response) -> str:
    """Best-effort human readable error detail for a failed response."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            error_info = response.json()
            error = error_info.get("error")
            message = (
                (error.get("message") if isinstance(error, dict) else error)
                or error_info.get("message")
                or str(error_info)
            )
        except Exception:
            message = response.text
    else:
        message = response.text
    return message or response.reason_phrase


class APIClient:
    """Client for interacting with an authenticated JSON API over HTTP."""

    def __init__(self, api_url: str, access_token: str, trace_id: Optional[str] = None):
        """Initialize the API client.

        Args:
            api_url: The base URL of the API (e.g., https://logging.googleapis.com/v2)
            access_token: The OAuth bearer token used for every request
            trace_id: Optional trace ID for the CLI process lifecycle (generated if not provided)
        """
        self.api_url = api_url.rstrip(
            "/"
        )  # Remove trailing slash for consistent URL building
        self.access_token = access_token
        # Generate or use provided trace ID for CLI process lifecycle
        self.trace_id = trace_id or str(uuid.uuid4())
        self.tracer = trace.get_tracer(__name__)

    def _url(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        # Inject OpenTelemetry trace context headers
        trace_headers: Dict[str, str] = {}
        inject(trace_headers)
        headers.update(trace_headers)

        headers["X-Cloudtail-Trace-Id"] = self.trace_id

        return headers

    async def post(
        self, path: str, payload: Dict[str, Any], timeout: float = 30.0
    ) -> httpx.Response:
        """POST ``payload`` as JSON to ``path``.

        Non-2xx responses are returned as-is; status handling belongs to the caller.
        """
        with self.tracer.start_as_current_span(
            f"api.post.{path.strip('/').replace('/', '.')}",
            attributes={
                "http.method": "POST",
                "http.url": self._url(path),
                "cloudtail.trace_id": self.trace_id,
            },
        ) as span:
            try:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self._url(path),
                        json=payload,
                        headers=self._get_headers(),
                        timeout=timeout,
                    )
                    span.set_attribute("http.status_code", response.status_code)
                    return response
            except Exception as e:
                span.record_exception(e)
                raise
