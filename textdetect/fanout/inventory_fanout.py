"""S3 Batch Operations task handling: filter inventory objects and enqueue images."""

import json
from typing import Any
from urllib.parse import unquote_plus

from textdetect.logging.logger import Log
from textdetect.queue.sqs_queue import SqsQueue

SUPPORTED_EXTENSIONS = (".jpg", ".jpeg", ".png")

RESULT_SUCCEEDED = "Succeeded"
RESULT_TEMPORARY_FAILURE = "TemporaryFailure"


def file_extension(key: str) -> str:
    """Lower-cased extension including the dot, or "" when the key has none."""
    lowered = key.lower()
    dot = lowered.rfind(".")
    return lowered[dot:] if dot != -1 else ""


def bucket_from_task(task: dict[str, Any]) -> str:
    """Bucket name from s3BucketArn (schema 1.0) or s3Bucket (schema 2.0)."""
    if "s3Bucket" in task:
        return str(task["s3Bucket"])
    arn = str(task["s3BucketArn"])
    _, sep, bucket = arn.partition(":::")
    if not sep or not bucket:
        raise ValueError(f"Not an S3 bucket ARN: '{arn}'")
    return bucket


class InventoryFanout:
    """Turns each inventory task into one queue message per supported image."""

    def __init__(
        self,
        queue: SqsQueue,
        supported_extensions: tuple[str, ...] = SUPPORTED_EXTENSIONS,
    ) -> None:
        self._queue = queue
        self._supported_extensions = supported_extensions

    def handle(self, event: dict[str, Any]) -> dict[str, Any]:
        results = [self._handle_task(task) for task in event.get("tasks", [])]
        Log.info(f"Inventory fan-out results: {results}")
        return {
            "invocationSchemaVersion": event.get("invocationSchemaVersion"),
            "treatMissingKeysAs": RESULT_TEMPORARY_FAILURE,
            "invocationId": event.get("invocationId"),
            "results": results,
        }

    def _handle_task(self, task: dict[str, Any]) -> dict[str, str]:
        task_id = str(task.get("taskId", ""))
        try:
            key = unquote_plus(task["s3Key"], encoding="utf-8")
            bucket = bucket_from_task(task)
            extension = file_extension(key)
            if extension not in self._supported_extensions:
                return self._result(
                    task_id,
                    RESULT_SUCCEEDED,
                    f"Skipped - Unsupported file type: {extension or '<none>'}",
                )

            body = json.dumps(
                {"bucket": bucket, "key": key, "versionId": task.get("s3VersionId")}
            )
            self._queue.send(body)
            return self._result(task_id, RESULT_SUCCEEDED, "Successfully queued for processing")
        except Exception as exc:
            Log.error(f"Inventory task {task_id} failed: {exc}")
            return self._result(
                task_id, RESULT_TEMPORARY_FAILURE, f"Error processing task: {exc}"
            )

    @staticmethod
    def _result(task_id: str, code: str, text: str) -> dict[str, str]:
        return {"taskId": task_id, "resultCode": code, "resultString": text}
