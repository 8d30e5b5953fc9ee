"""Azure Functions app for the video service"""
import azure.functions as func

from animesentinel_video_service.blueprints.bp_add_video import bp as bp_add_video
from animesentinel_video_service.blueprints.bp_get_episode import bp as bp_get_episode
from animesentinel_video_service.blueprints.bp_get_show import bp as bp_get_show
from animesentinel_video_service.blueprints.bp_refresh_video_link import bp as bp_refresh_video_link
from animesentinel_video_service.blueprints.bp_start_refresh import bp as bp_start_refresh

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

app.register_functions(bp_add_video)
app.register_functions(bp_get_episode)
app.register_functions(bp_get_show)
app.register_functions(bp_refresh_video_link)
app.register_functions(bp_start_refresh)
