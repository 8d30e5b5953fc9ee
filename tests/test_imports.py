"""Test that all modules can be imported successfully."""
import os

os.environ.setdefault('SQLALCHEMY_CONNECTION_STRING', 'sqlite:///:memory:')


def test_video_model_import():
    """Test that Video model can be imported."""
    from animesentinel_video_service.models.video import Video
    assert Video is not None

def test_video_service_import():
    """Test that VideoService can be imported."""
    from animesentinel_video_service.services.video_service import VideoService
    assert VideoService is not None

def test_video_repository_import():
    """Test that VideoRepository can be imported."""
    from animesentinel_video_service.repos.video_repo import VideoRepository
    assert VideoRepository is not None

def test_blueprints_import():
    """Test that all blueprints can be imported."""
    from animesentinel_video_service.blueprints import bp_add_video
    from animesentinel_video_service.blueprints import bp_get_episode
    from animesentinel_video_service.blueprints import bp_get_show
    from animesentinel_video_service.blueprints import bp_refresh_video_link
    from animesentinel_video_service.blueprints import bp_start_refresh

    assert bp_add_video is not None
    assert bp_get_episode is not None
    assert bp_get_show is not None
    assert bp_refresh_video_link is not None
    assert bp_start_refresh is not None

def test_function_app_import():
    """Test that function app can be imported."""
    from function_app import app
    assert app is not None
