from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from postlink.service.exceptions import ValidationError

Categories = str | list[str]


class UploadRequestBody(BaseModel):
    """Wire shape of an upload submission."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file_name: str | None = Field(default=None, alias="fileName")
    url: str | None = None
    original_file_name: str | None = Field(default=None, alias="originalFileName")
    categories: Categories | None = None


class UploadResponseBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    group: str
    matched_via: str = Field(alias="matchedVia")
    matched_candidate: str | None = Field(alias="matchedCandidate")
    members_copied: int = Field(alias="membersCopied")
    post_id: str = Field(alias="postId")


@dataclass(frozen=True)
class UploadRequest:
    """Validated upload submission."""

    encrypted_file_name: str
    encrypted_url: str
    original_file_name: str
    categories: Categories | None = None


def parse_upload_request(payload: Any) -> UploadRequest:
    """Validate a decoded JSON body.

    Raises:
        ValidationError: if the body is not an object, a field has the wrong
            type, or a required field is absent or empty.
    """
    if not isinstance(payload, dict):
        raise ValidationError(
            {"reason": "body must be a JSON object"},
            summary="Malformed request body",
        )
    try:
        body = UploadRequestBody.model_validate(payload)
    except PydanticValidationError as exc:
        errors = [
            {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError({"errors": errors}, summary="Malformed request body") from exc

    file_name, url, original_file_name = body.file_name, body.url, body.original_file_name
    if not (file_name and url and original_file_name):
        raise ValidationError(
            {
                "fileName": bool(file_name),
                "url": bool(url),
                "originalFileName": bool(original_file_name),
            }
        )

    return UploadRequest(
        encrypted_file_name=file_name,
        encrypted_url=url,
        original_file_name=original_file_name,
        categories=body.categories,
    )
