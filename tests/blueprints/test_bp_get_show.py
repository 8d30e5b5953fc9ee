"""
Unit tests for bp_get_show blueprint.
"""
import json
import os
import unittest
from unittest.mock import MagicMock, patch

import azure.functions as func

# Set required env vars for module import
os.environ['SQLALCHEMY_CONNECTION_STRING'] = 'sqlite:///:memory:'

from animesentinel_video_service.blueprints.bp_get_show import get_show


class TestBpGetShow(unittest.TestCase):
    """Test cases for the get_show HTTP endpoint function."""

    def setUp(self):
        self.mock_video_service = MagicMock()
        self.mock_http_request = MagicMock(spec=func.HttpRequest)
        self.mock_http_request.route_params = {'show_id': '12'}

    @patch('animesentinel_video_service.blueprints.bp_get_show.VideoService')
    def test_get_show_success(self, mock_video_service_class):
        """Test show details are returned."""
        mock_video_service_class.return_value = self.mock_video_service
        self.mock_video_service.get_show.return_value = {"id": 12, "title": "Cowboy Bebop", "hits": 4}

        response = get_show(self.mock_http_request)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(json.loads(response.get_body().decode())["hits"], 4)
        self.mock_video_service.get_show.assert_called_once_with(12)

    @patch('animesentinel_video_service.blueprints.bp_get_show.VideoService')
    def test_get_show_not_found(self, mock_video_service_class):
        """Test an unknown show gives 404."""
        mock_video_service_class.return_value = self.mock_video_service
        self.mock_video_service.get_show.return_value = None

        self.assertEqual(get_show(self.mock_http_request).status_code, 404)

    def test_get_show_invalid_id(self):
        """Test a non-numeric show ID gives 400."""
        self.mock_http_request.route_params = {'show_id': 'bebop'}
        self.assertEqual(get_show(self.mock_http_request).status_code, 400)

    @patch('animesentinel_video_service.blueprints.bp_get_show.VideoService')
    @patch('animesentinel_video_service.blueprints.bp_get_show.logging')
    def test_get_show_unexpected_error(self, mock_logging, mock_video_service_class):
        """Test unexpected errors are logged and give 500."""
        mock_video_service_class.return_value = self.mock_video_service
        self.mock_video_service.get_show.side_effect = RuntimeError("boom")

        self.assertEqual(get_show(self.mock_http_request).status_code, 500)
        mock_logging.error.assert_called_once()


if __name__ == '__main__':
    unittest.main()
