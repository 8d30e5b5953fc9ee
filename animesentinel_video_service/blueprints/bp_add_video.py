"""Add a mirror for an episode"""
import json
import logging

import azure.functions as func

from animesentinel_video_service.services.video_service import VideoService

bp: func.Blueprint = func.Blueprint()


@bp.function_name(name="add_video")
@bp.route(route="videos", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def add_video(req: func.HttpRequest) -> func.HttpResponse:
    """Add a mirror; its mirror ordinal is allocated by the service

    Args:
        req (func.HttpRequest): Request with the video as JSON body

    Returns:
        func.HttpResponse: Response with the stored video
    """
    try:
        video_data = req.get_json()
        if not isinstance(video_data, dict):
            raise ValueError("Request body must be a JSON object")

        video_service = VideoService()
        video = video_service.add_video(video_data)

        return func.HttpResponse(
            body=json.dumps(video),
            status_code=201,
            headers={"Content-Type": "application/json"}
        )

    except ValueError as e:
        return func.HttpResponse(
            body=f"Invalid video: {e}",
            status_code=400
        )
    except Exception as e:
        logging.error(f"add_video: Unhandled exception: {e}", exc_info=True)
        return func.HttpResponse(
            body="Internal server error",
            status_code=500
        )
