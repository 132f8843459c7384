# projecthub/modules/uploads/routes.py
"""Image upload endpoint backed by the storage gateway."""

from fastapi import APIRouter, Depends, File, UploadFile, status

from projecthub.core.logging import get_logger
from projecthub.core.upload_constants import MAX_IMAGE_SIZE_BYTES
from projecthub.db.deps import get_current_user
from projecthub.integrations.storage import StorageGateway, StorageKind, StoredAsset, UploadResult
from projecthub.modules.uploads.deps import get_storage_gateway
from projecthub.schemas.upload import UploadResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/upload",
    tags=["upload"],
    dependencies=[Depends(get_current_user)],
)


def to_response(result: UploadResult) -> UploadResponse:
    if result.storage_kind == StorageKind.inline:
        return UploadResponse(
            url=result.url,
            mime_type=result.mime_type,
            size=result.size_bytes,
            storage="base64",
        )
    return UploadResponse(url=result.url, filename=result.object_name, bucket=result.bucket)


@router.post(
    "",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def upload_image(
    image: UploadFile = File(..., description="Image file, at most 5MB"),
    gateway: StorageGateway = Depends(get_storage_gateway),
):
    """
    Upload an image and return the URL to store on a project.

    Flow:
    1. Read the multipart `image` part
    2. Gateway validates type and size (400 / 413)
    3. Gateway stores it in the bucket, or inline when storage is unreachable
    4. Return the URL; the client saves it via POST/PUT /projects
    """
    # One byte past the ceiling is enough for the gateway to reject it
    data = image.file.read(MAX_IMAGE_SIZE_BYTES + 1)
    asset = StoredAsset.from_bytes(
        data,
        mime_type=image.content_type or "application/octet-stream",
        filename=image.filename,
    )
    result = gateway.store(asset)
    logger.info("upload handled", storage=result.storage_kind.value, size_bytes=asset.size_bytes)
    return to_response(result)
