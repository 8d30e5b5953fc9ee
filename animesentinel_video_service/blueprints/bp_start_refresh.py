"""Queue a video link refresh"""
import azure.functions as func

from animesentinel_video_service.services.video_service import VideoService

bp: func.Blueprint = func.Blueprint()


@bp.function_name(name="start_refresh")
@bp.route(route="videos/{video_id:int}/refresh", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def start_refresh(req: func.HttpRequest) -> func.HttpResponse:
    """Queue a video link refresh for one video

    Args:
        req (func.HttpRequest): Request object

    Returns:
        func.HttpResponse: Response object
    """
    video_id = int(req.route_params.get('video_id'))

    video_service: VideoService = VideoService()  # initialize video service
    video_service.queue_refresh(video_id)  # hand the refresh to the queue

    response_text = f"Refreshing video link of video {video_id}"  # set response text
    return func.HttpResponse(response_text, status_code=202)
