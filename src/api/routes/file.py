from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.app.services.poster_store import IPosterStore, media_type_for
from src.app.use_cases.auth import Principal
from src.depends import get_current_account, get_poster_store

router = APIRouter(prefix="/file", tags=["Files"])


class UploadResponse(BaseModel):
    message: str
    file_name: str


@router.post("/upload", status_code=status.HTTP_200_OK, response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    _principal: Principal = Depends(get_current_account),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    """
    Upload a poster file.

    Raises:
        - 400 Bad Request: Empty or unsupported file
    """
    result = await poster_store.save(
        file.filename or "", file.content_type or "", await file.read()
    )

    if result.is_err():
        error = result.error
        if error.code in ("EMPTY_FILE", "UNSUPPORTED_FILE_TYPE", "INVALID_FILE_NAME"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return UploadResponse(message=f"File uploaded: {result.value}", file_name=result.value)


@router.get("/{file_name}", status_code=status.HTTP_200_OK)
async def serve_file(
    file_name: str,
    _principal: Principal = Depends(get_current_account),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    """
    Serve a stored poster with a media type derived from its extension.

    Raises:
        - 400 Bad Request: Name contains path separators
        - 404 Not Found: No such file
    """
    result = await poster_store.open(file_name)

    if result.is_err():
        error = result.error
        if error.code == "FILE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "INVALID_FILE_NAME":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return Response(content=result.value, media_type=media_type_for(file_name))
