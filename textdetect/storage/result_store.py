from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from textdetect.aws.errors import error_code
from textdetect.logging.logger import Log
from textdetect.processor.exceptions import RecordValidationError, RemoteUnavailableError
from textdetect.storage.models import ProcessedRecord


class DynamoResultStore:
    """DynamoDB table holding one item per processed object, keyed by s3Uri."""

    def __init__(self, client: Any, table_name: str) -> None:
        self._client = client
        self._table_name = table_name

    def upsert(self, record: ProcessedRecord) -> None:
        """Write the record as a full item, replacing any earlier one.

        Raises:
            RecordValidationError: if the record has no object id, or the
                table rejects the item.
            RemoteUnavailableError: on throttling, server or network faults.
        """
        if not record.object_id:
            raise RecordValidationError("ProcessedRecord.object_id must not be empty")

        try:
            self._client.put_item(TableName=self._table_name, Item=self._to_item(record))
        except ClientError as exc:
            if error_code(exc) == "ValidationException":
                raise RecordValidationError(
                    f"Table {self._table_name} rejected item {record.object_id}: {exc}"
                ) from exc
            raise RemoteUnavailableError(
                f"Failed to write {record.object_id} to {self._table_name}: {exc}"
            ) from exc
        except BotoCoreError as exc:
            raise RemoteUnavailableError(
                f"Failed to write {record.object_id} to {self._table_name}: {exc}"
            ) from exc

        Log.debug(f"Stored result for {record.object_id} in {self._table_name}")

    @staticmethod
    def _to_item(record: ProcessedRecord) -> dict[str, dict[str, Any]]:
        return {
            "s3Uri": {"S": record.object_id},
            "text_detected_flattened": {"S": record.text},
            "contains_word": {"BOOL": record.contains_word},
        }
