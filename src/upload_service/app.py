from fastapi import FastAPI, UploadFile, File, status, HTTPException
from pydantic import BaseModel

from src.upload_service.domain import UploadRequest, ingest_upload
from src.upload_service.exceptions import (
    EmptyInputError,
    KeyCollisionError,
    StorageUnavailableError,
    WriteFailedError,
)
from src.upload_service.storage import StorageClient


class FileUploadResponse(BaseModel):
    key: str
    filename: str
    size: int


def create_app(storage_client: StorageClient) -> FastAPI:
    app = FastAPI(title="Upload Service")

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.post(
        "/files",
        status_code=status.HTTP_201_CREATED,
        response_model=FileUploadResponse,
    )
    def upload_file(file: UploadFile = File(...)) -> FileUploadResponse:
        """Store an uploaded file and return its storage key."""
        request = UploadRequest(
            stream=file.file,
            filename=file.filename,
            size=file.size,
        )

        try:
            stored = ingest_upload(storage=storage_client, request=request)
        except EmptyInputError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except KeyCollisionError:
            raise HTTPException(status_code=409, detail="Storage key conflict")
        except StorageUnavailableError:
            raise HTTPException(status_code=503, detail="Storage unavailable")
        except WriteFailedError:
            raise HTTPException(status_code=500, detail="Upload failed")

        return FileUploadResponse(
            key=stored.key,
            filename=stored.filename,
            size=stored.size,
        )

    return app
