import os
import unittest
from unittest.mock import patch

# Set required env vars for module import
os.environ['SQLALCHEMY_CONNECTION_STRING'] = 'sqlite:///:memory:'

# This needs to be imported after the environment is patched
from animesentinel_video_service.config import _get_setting


class TestConfig(unittest.TestCase):

    @patch.dict(os.environ, {'SQLALCHEMY_CONNECTION_STRING': 'mysql+pymysql://user:pass@db_host:3306/animesentinel'})
    def test_db_connection_string_loaded_from_env(self):
        """Check if the DB connection string is loaded correctly from the environment."""
        result = _get_setting('SQLALCHEMY_CONNECTION_STRING')
        self.assertEqual(result, 'mysql+pymysql://user:pass@db_host:3306/animesentinel')

    @patch.dict(os.environ, {'TEST_VAR': 'test_value'})
    def test_get_setting_found_in_env(self):
        """Test _get_setting when a variable is present in the environment."""
        self.assertEqual(_get_setting('TEST_VAR'), 'test_value')

    @patch('animesentinel_video_service.config._local_settings', {'TEST_VAR': 'local_value'})
    def test_get_setting_fallback_to_local_settings(self):
        """Test _get_setting falls back to local settings when env var is missing."""
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(_get_setting('TEST_VAR'), 'local_value')

    @patch('animesentinel_video_service.config._local_settings', {'TEST_VAR': 'local_value'})
    def test_get_setting_env_wins_over_local_settings(self):
        """Test the environment takes precedence over local settings."""
        with patch.dict(os.environ, {'TEST_VAR': 'env_value'}, clear=True):
            self.assertEqual(_get_setting('TEST_VAR'), 'env_value')

    def test_get_setting_missing_required(self):
        """Test _get_setting raises ValueError when a required variable is missing."""
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaisesRegex(ValueError, "Missing required setting: 'MISSING_VAR'"):
                _get_setting('MISSING_VAR', required=True)

    def test_get_setting_missing_not_required(self):
        """Test _get_setting returns None when a non-required variable is missing."""
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(_get_setting('MISSING_VAR', required=False))

    def test_get_setting_missing_not_required_with_default(self):
        """Test _get_setting returns the default value for a missing non-required variable."""
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(_get_setting('MISSING_VAR', required=False, default='default_val'), 'default_val')

    @patch.dict(os.environ, {'PROBE_MAX_ATTEMPTS': '4', 'PROBE_TIMEOUT_SECONDS': '12.5'})
    def test_probe_settings_config(self):
        """Test probe settings are loaded and converted."""
        import importlib
        import animesentinel_video_service.config
        config = importlib.reload(animesentinel_video_service.config)
        self.assertEqual(config.PROBE_MAX_ATTEMPTS, 4)
        self.assertEqual(config.PROBE_TIMEOUT_SECONDS, 12.5)

    def test_probe_settings_defaults(self):
        """Test probe settings fall back to their defaults."""
        import importlib
        import animesentinel_video_service.config
        with patch.dict(os.environ, {}, clear=True), \
             patch('animesentinel_video_service.config._local_settings', {}):
            config = importlib.reload(animesentinel_video_service.config)
        self.assertEqual(config.PROBE_MAX_ATTEMPTS, 9)
        self.assertEqual(config.FFPROBE_PATH, 'ffprobe')

    @patch.dict(os.environ, {'AzureWebJobsStorage': 'DefaultEndpointsProtocol=https;AccountName=test'})
    def test_storage_connection_string_config(self):
        """Test STORAGE_CONNECTION_STRING configuration loading."""
        import importlib
        import animesentinel_video_service.config
        config = importlib.reload(animesentinel_video_service.config)
        self.assertEqual(config.STORAGE_CONNECTION_STRING, 'DefaultEndpointsProtocol=https;AccountName=test')


if __name__ == '__main__':
    unittest.main()
