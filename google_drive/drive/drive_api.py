import io
import logging
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload
from typing import Optional

logger = logging.getLogger(__name__)


class GoogleDriveAdapter:
    SCOPES = ["https://www.googleapis.com/auth/drive.file"]

    def __init__(self, service_account_file):
        self.service_account_file = service_account_file
        self.creds = self._get_credentials()
        self.service = self._initialize_service()

    def _get_credentials(self):
        # Scheduled jobs cannot run the interactive OAuth flow, so a service
        # account is used. Share the destination folder with its address.
        return service_account.Credentials.from_service_account_file(
            self.service_account_file, scopes=self.SCOPES
        )

    def _initialize_service(self):
        return build('drive', 'v3', credentials=self.creds, cache_discovery=False)

    def upload_file(self, name: str, mime_type: str, contents: str, folder_id: str) -> Optional[str]:
        """
        Upload text as a new file in a Drive folder.

        Args:
            name: The file name.
            mime_type: The MIME type, e.g. ``text/csv``.
            contents: The file contents.
            folder_id: The id of the parent folder.

        Returns:
            The id of the new file, or None if the upload failed.
        """
        metadata = {'name': name, 'parents': [folder_id], 'mimeType': mime_type}
        media = MediaIoBaseUpload(io.BytesIO(contents.encode('utf-8')), mimetype=mime_type, resumable=False)
        try:
            result = self.service.files().create(
                body=metadata, media_body=media, fields='id', supportsAllDrives=True
            ).execute()
            return result.get('id')
        except HttpError as err:
            logger.error(f"HttpError occurred: {err}")
            return None
