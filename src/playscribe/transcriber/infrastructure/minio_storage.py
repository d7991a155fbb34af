"""MinIO implementation of the StorageClient interface."""

import io

from minio import Minio
from minio.error import S3Error

from playscribe.common import StorageDownloadError, StorageUploadError, setup_logging
from playscribe.transcriber.infrastructure.interfaces import StorageClient

logger = setup_logging()

TRANSCRIPT_CONTENT_TYPE = "text/plain"


class MinioStorageClient(StorageClient):
    """
    Reads recordings from and writes transcripts to MinIO.

    Recordings are only ever held in memory; nothing is written to local disk.
    """

    def __init__(self, client: Minio):
        self._client = client

    def download_recording(self, bucket_name: str, object_name: str) -> bytes:
        response = None
        try:
            response = self._client.get_object(bucket_name, object_name)
            data = response.read()
        except (S3Error, OSError) as e:
            logger.exception(
                "Recording download failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e
        finally:
            if response is not None:
                response.close()
                response.release_conn()

        logger.info(
            "Recording downloaded",
            extra={"object_name": object_name, "size_bytes": len(data)},
        )
        return data

    def upload_transcript(self, bucket_name: str, object_name: str, text: str) -> None:
        encoded = text.encode("utf-8")
        try:
            self._client.put_object(
                bucket_name,
                object_name,
                io.BytesIO(encoded),
                length=len(encoded),
                content_type=TRANSCRIPT_CONTENT_TYPE,
            )
        except (S3Error, OSError) as e:
            logger.exception(
                "Transcript upload failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

        logger.info(
            "Transcript stored", extra={"object_name": object_name, "size_bytes": len(encoded)}
        )

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        try:
            if not self._client.bucket_exists(bucket_name):
                self._client.make_bucket(bucket_name)
                logger.info("Bucket created", extra={"bucket_name": bucket_name})
        except S3Error as e:
            logger.exception("Bucket check failed", extra={"bucket_name": bucket_name})
            raise StorageUploadError(bucket_name, e) from e
