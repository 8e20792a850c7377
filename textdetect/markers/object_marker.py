from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from textdetect.aws.errors import error_code
from textdetect.logging.logger import Log
from textdetect.markers.models import (
    MARKER_FALSE,
    MARKER_TRUE,
    MarkerSet,
    MarkerUpdateOutcome,
)
from textdetect.processor.exceptions import ObjectNotFoundError, RemoteUnavailableError

DEFAULT_MARKER_NAME = "rekognition_text_detection"
MAX_OBJECT_TAGS = 10


class ObjectMarker:
    """Reads and writes the idempotency tag on S3 objects."""

    NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "404"})

    def __init__(
        self,
        client: Any,
        marker_name: str = DEFAULT_MARKER_NAME,
        max_tags: int = MAX_OBJECT_TAGS,
    ) -> None:
        self._client = client
        self._marker_name = marker_name
        self._max_tags = max_tags

    @property
    def marker_name(self) -> str:
        return self._marker_name

    def is_processed(self, markers: MarkerSet) -> bool:
        return markers.value_of(self._marker_name) == MARKER_TRUE

    def get_markers(self, bucket: str, key: str) -> MarkerSet:
        """Fetch all tags of the current object version.

        Raises:
            ObjectNotFoundError: if the bucket or key does not exist.
            RemoteUnavailableError: on any other S3 failure.
        """
        try:
            response = self._client.get_object_tagging(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise self._translate(exc, bucket, key) from exc
        return MarkerSet.from_tag_set(response.get("TagSet", []))

    def set_processed(self, bucket: str, key: str, current: MarkerSet) -> MarkerUpdateOutcome:
        """Mark the object as processed, keeping every unrelated tag.

        An existing "false" tag is flipped in place. Otherwise the tag is
        appended, unless the object already carries the maximum number of
        tags, in which case the write is skipped with a warning.
        """
        uri = f"s3://{bucket}/{key}"
        value = current.value_of(self._marker_name)

        if value == MARKER_TRUE:
            Log.debug(f"Object {uri} already tagged '{self._marker_name}=true'")
            return MarkerUpdateOutcome.ALREADY_PROCESSED

        if value == MARKER_FALSE:
            self._put(bucket, key, current.with_value(self._marker_name, MARKER_TRUE))
            Log.info(f"Object {uri} had '{self._marker_name}=false', updated the tag value to 'true'")
            return MarkerUpdateOutcome.UPDATED_EXISTING

        if len(current) < self._max_tags:
            self._put(bucket, key, current.appended(self._marker_name, MARKER_TRUE))
            Log.info(f"Added '{self._marker_name}' object tag to {uri}")
            return MarkerUpdateOutcome.APPENDED

        Log.warning(
            f"Object {uri} already has the maximum of {self._max_tags} tags, "
            f"skipping the '{self._marker_name}' tag"
        )
        return MarkerUpdateOutcome.SKIPPED_CAPACITY

    def _put(self, bucket: str, key: str, markers: MarkerSet) -> None:
        try:
            self._client.put_object_tagging(
                Bucket=bucket,
                Key=key,
                Tagging={"TagSet": markers.to_tag_set()},
            )
        except (ClientError, BotoCoreError) as exc:
            raise self._translate(exc, bucket, key) from exc

    def _translate(self, exc: Exception, bucket: str, key: str) -> Exception:
        uri = f"s3://{bucket}/{key}"
        if isinstance(exc, ClientError) and error_code(exc) in self.NOT_FOUND_CODES:
            return ObjectNotFoundError(f"Object {uri} not found")
        return RemoteUnavailableError(f"S3 tagging failed for {uri}: {exc}")
