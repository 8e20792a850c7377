from textdetect.aws.clients import init_clients
from textdetect.config.settings import Settings
from textdetect.logging.logger import Log
from textdetect.processor.processor import build_processor
from textdetect.queue.sqs_queue import SqsQueue
from textdetect.worker.job_runner import JobRunner
from textdetect.worker.worker import Worker


def main() -> None:
    """Entry point: build clients -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    if not settings.sqs_queue_url:
        raise ValueError("sqs_queue_url is required")

    clients = init_clients(settings)
    processor = build_processor(settings, clients)
    queue = SqsQueue(
        clients.sqs,
        settings.sqs_queue_url,
        wait_time_seconds=settings.queue_wait_time_seconds,
    )
    job_runner = JobRunner(processor, queue.queue_url, settings)
    worker = Worker(queue, job_runner, settings)
    worker.run()


if __name__ == "__main__":
    main()
