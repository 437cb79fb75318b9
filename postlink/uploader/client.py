from typing import Any

import httpx

from postlink.uploader.exceptions import SubmissionError
from postlink.uploader.models import SubmissionPayload, SubmissionReceipt

UPLOADS_PATH = "/api/uploads"


class ResolutionClient:
    """Submits encrypted upload metadata to the group resolution service."""

    def __init__(self, client: httpx.AsyncClient, path: str = UPLOADS_PATH) -> None:
        self._client = client
        self._path = path

    async def submit(self, payload: SubmissionPayload) -> SubmissionReceipt:
        """POST one file's metadata.

        Raises:
            SubmissionError: on transport failure, a non-2xx status, or an
                unreadable success body.
        """
        try:
            response = await self._client.post(self._path, json=payload.to_json())
        except httpx.HTTPError as exc:
            raise SubmissionError(f"Resolution service unreachable: {exc}") from exc

        body = self._json_body(response)
        if not response.is_success:
            error = body.get("error") if body else None
            raise SubmissionError(
                f"HTTP {response.status_code}: {error or response.reason_phrase}"
            )
        if body is None:
            raise SubmissionError("Resolution service returned a non-JSON body")

        try:
            return SubmissionReceipt(
                group=body["group"],
                matched_via=body["matchedVia"],
                matched_candidate=body.get("matchedCandidate"),
                members_copied=int(body["membersCopied"]),
                post_id=body["postId"],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SubmissionError(f"Unexpected response body: {exc}") from exc

    @staticmethod
    def _json_body(response: httpx.Response) -> dict[str, Any] | None:
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None
