"""
Unit tests for bp_refresh_video_link blueprint.
Tests the queue-triggered function that refreshes one video's link.
"""
import os
import unittest
import logging
from unittest.mock import MagicMock, patch

import azure.functions as func

# Set required env vars for module import
os.environ['SQLALCHEMY_CONNECTION_STRING'] = 'sqlite:///:memory:'

from animesentinel_video_service.blueprints.bp_refresh_video_link import refresh_video_link


class TestBpRefreshVideoLink(unittest.TestCase):
    """Test cases for the refresh_video_link queue trigger function."""

    def setUp(self):
        self.mock_video_service = MagicMock()
        self.mock_queue_message = MagicMock(spec=func.QueueMessage)
        self.mock_queue_message.id = "test-message-id-123"
        self.mock_queue_message.dequeue_count = 1
        self.mock_queue_message.get_json.return_value = {"video_id": 7}

    def tearDown(self):
        logging.getLogger().handlers.clear()

    @patch('animesentinel_video_service.blueprints.bp_refresh_video_link.VideoService')
    @patch('animesentinel_video_service.blueprints.bp_refresh_video_link.logging')
    def test_refresh_video_link_success(self, mock_logging, mock_video_service_class):
        """Test successful processing of a refresh message."""
        # Arrange
        mock_video_service_class.return_value = self.mock_video_service

        # Act
        refresh_video_link(self.mock_queue_message)

        # Assert
        self.mock_video_service.refresh_video_link.assert_called_once_with(self.mock_queue_message)
        mock_logging.info.assert_any_call(f"=== PROCESSING REFRESH MESSAGE ID: {self.mock_queue_message.id} ===")
        mock_logging.info.assert_any_call(
            f"=== SUCCESSFULLY PROCESSED REFRESH MESSAGE ID: {self.mock_queue_message.id} ==="
        )
        mock_logging.error.assert_not_called()

    @patch('animesentinel_video_service.blueprints.bp_refresh_video_link.VideoService')
    @patch('animesentinel_video_service.blueprints.bp_refresh_video_link.logging')
    def test_refresh_video_link_error_is_raised(self, mock_logging, mock_video_service_class):
        """Test errors are logged and re-raised so the host retries the message."""
        # Arrange
        mock_video_service_class.return_value = self.mock_video_service
        processing_error = RuntimeError("database unavailable")
        self.mock_video_service.refresh_video_link.side_effect = processing_error

        # Act & Assert
        with self.assertRaises(RuntimeError):
            refresh_video_link(self.mock_queue_message)

        mock_logging.error.assert_any_call(
            f"=== ERROR PROCESSING REFRESH MESSAGE ID {self.mock_queue_message.id} ===",
            exc_info=True
        )
        mock_logging.error.assert_any_call(f"Exception type: {type(processing_error).__name__}")
        mock_logging.error.assert_any_call(f"Exception message: {str(processing_error)}")


if __name__ == '__main__':
    unittest.main()
