from abc import ABC, abstractmethod
from ..models.report import StoredArtifact

CSV_MIME_TYPE = "text/csv"


class BaseStorageAdapter(ABC):
    """Abstract base class for report storage backends."""

    @abstractmethod
    def store(self, file_name: str, mime_type: str, contents: str, destination: str) -> StoredArtifact:
        """
        Persist a report file.

        Raises:
            StorageError: If the file could not be written.
        """
        pass
