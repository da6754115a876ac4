from .base_storage_adapter import BaseStorageAdapter, CSV_MIME_TYPE
from .local_storage_adapter import LocalStorageAdapter
from .drive_storage_adapter import GoogleDriveStorageAdapter
from .email_notifier import EmailNotifier

__all__ = ['BaseStorageAdapter', 'CSV_MIME_TYPE', 'LocalStorageAdapter', 'GoogleDriveStorageAdapter', 'EmailNotifier']
