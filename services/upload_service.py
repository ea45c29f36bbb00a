import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from fastapi import HTTPException, Request, status
from starlette.datastructures import UploadFile


logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024


@dataclass
class UploadedImage:
    filename: str
    content_type: str
    data: bytes


@dataclass
class RequestPayload:
    """Scalar fields plus any image files, whether the body was JSON or multipart."""

    fields: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, List[UploadedImage]] = field(default_factory=dict)

    def first_file(self, name: str) -> UploadedImage | None:
        items = self.files.get(name) or []
        return items[0] if items else None


def _is_form(content_type: str) -> bool:
    return content_type.startswith("multipart/form-data") or content_type.startswith(
        "application/x-www-form-urlencoded"
    )


def _too_large(max_bytes: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB",
    )


async def _read_image(upload: UploadFile, max_bytes: int) -> UploadedImage:
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are allowed")
    # The form parser already spooled the part, so its size is known before reading it back.
    if upload.size is not None and upload.size > max_bytes:
        raise _too_large(max_bytes)
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise _too_large(max_bytes)
    return UploadedImage(filename=upload.filename or "upload", content_type=content_type, data=data)


async def read_payload(
    request: Request,
    file_fields: Dict[str, int] | None = None,
    max_bytes: int = MAX_IMAGE_BYTES,
) -> RequestPayload:
    """Reads a JSON or form body. `file_fields` maps accepted file field names to their max count."""
    file_fields = file_fields or {}
    content_type = request.headers.get("content-type", "").lower()
    payload = RequestPayload()

    if _is_form(content_type):
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if not value.filename:
                    continue
                if key not in file_fields:
                    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unexpected file field: {key}")
                bucket = payload.files.setdefault(key, [])
                if len(bucket) >= file_fields[key]:
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail=f"Too many files for field {key} (max {file_fields[key]})",
                    )
                bucket.append(await _read_image(value, max_bytes))
            elif key in payload.fields:
                existing = payload.fields[key]
                payload.fields[key] = existing + [value] if isinstance(existing, list) else [existing, value]
            else:
                payload.fields[key] = value
        return payload

    body = await request.body()
    if not body.strip():
        return payload
    try:
        parsed = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body")
    if not isinstance(parsed, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must be a JSON object")
    payload.fields = parsed
    return payload
