import logging
from .base_storage_adapter import BaseStorageAdapter
from ..exceptions import StorageError
from ..models.report import StoredArtifact

logger = logging.getLogger(__name__)


class GoogleDriveStorageAdapter(BaseStorageAdapter):
    """Uploads report files to a Google Drive folder; the destination is the folder id."""

    def __init__(self, drive_adapter):
        self.drive = drive_adapter

    def store(self, file_name: str, mime_type: str, contents: str, destination: str) -> StoredArtifact:
        try:
            file_id = self.drive.upload_file(file_name, mime_type, contents, destination)
        except Exception as e:
            raise StorageError(f"Upload of {file_name} to Drive folder {destination} failed: {e}") from e

        if not file_id:
            raise StorageError(f"Upload of {file_name} to Drive folder {destination} failed")

        logger.info(f"Report uploaded to Drive folder {destination} (file id {file_id})")
        return StoredArtifact(artifact_id=file_id, file_name=file_name, mime_type=mime_type, contents=contents)
