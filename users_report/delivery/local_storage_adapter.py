import logging
import os
import tempfile
from .base_storage_adapter import BaseStorageAdapter
from ..exceptions import StorageError
from ..models.report import StoredArtifact

logger = logging.getLogger(__name__)


class LocalStorageAdapter(BaseStorageAdapter):
    """Writes report files into a directory; the destination is the directory path."""

    def store(self, file_name: str, mime_type: str, contents: str, destination: str) -> StoredArtifact:
        """
        Write the report next to its final path and move it into place, so a
        failed write never leaves a partial file behind.

        Raises:
            StorageError: If the file could not be written.
        """
        path = os.path.join(destination, file_name)
        temp_path = None
        try:
            os.makedirs(destination, exist_ok=True)
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', newline='', dir=destination,
                                             prefix=f'.{file_name}.', suffix='.tmp', delete=False) as fh:
                temp_path = fh.name
                fh.write(contents)
            os.replace(temp_path, path)
        except OSError as e:
            if temp_path and os.path.exists(temp_path):
                os.remove(temp_path)
            raise StorageError(f"Could not write {path}: {e}") from e

        logger.info(f"Report written to {path}")
        return StoredArtifact(artifact_id=path, file_name=file_name, mime_type=mime_type, contents=contents)
