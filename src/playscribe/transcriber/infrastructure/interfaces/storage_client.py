"""Abstract interface for recording and transcript storage."""

from abc import ABC, abstractmethod


class StorageClient(ABC):
    """Object storage holding uploaded recordings and the transcripts made from them."""

    @abstractmethod
    def download_recording(self, bucket_name: str, object_name: str) -> bytes:
        """
        Reads a whole recording into memory.

        Raises:
            StorageDownloadError: If the object cannot be read.
        """
        pass

    @abstractmethod
    def upload_transcript(self, bucket_name: str, object_name: str, text: str) -> None:
        """
        Stores a transcript as UTF-8 plain text, replacing any earlier version.

        Raises:
            StorageUploadError: If the object cannot be written.
        """
        pass

    @abstractmethod
    def ensure_bucket_exists(self, bucket_name: str) -> None:
        pass
