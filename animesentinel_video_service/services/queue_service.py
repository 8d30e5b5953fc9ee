"""Publishing JSON messages to Azure Storage queues."""
import json
import logging
from typing import Any

from azure.core.exceptions import ResourceExistsError
from azure.storage.queue import QueueClient, TextBase64EncodePolicy

from animesentinel_video_service.config import STORAGE_CONNECTION_STRING


class QueueService:
    """Publishes JSON messages to Azure Storage queues."""
    def __init__(self, connection_string: str | None = STORAGE_CONNECTION_STRING) -> None:
        self.connection_string = connection_string
        self._clients: dict[str, QueueClient] = {}

    def get_queue_client(self, queue_name: str) -> QueueClient:
        """Get a client for a queue, creating the queue on first use."""
        if queue_name not in self._clients:
            if not self.connection_string:
                raise ValueError("Missing required setting: 'AzureWebJobsStorage'")
            client = QueueClient.from_connection_string(
                self.connection_string, queue_name, message_encode_policy=TextBase64EncodePolicy()
            )
            try:
                client.create_queue()
            except ResourceExistsError:
                pass
            self._clients[queue_name] = client
        return self._clients[queue_name]

    def upload_queue_message(self, queue_name: str, message: dict[str, Any]) -> None:
        """Send a message to a queue

        Args:
            queue_name (str): Queue name
            message (dict[str, Any]): Message body, sent as JSON
        """
        self.get_queue_client(queue_name).send_message(json.dumps(message))
        logging.debug(f"QueueService.upload_queue_message: Sent {message} to {queue_name}")
