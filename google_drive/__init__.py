from .drive.drive_api import GoogleDriveAdapter

__all__ = ['GoogleDriveAdapter']
