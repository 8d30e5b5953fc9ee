"""Get show details"""
import json
import logging

import azure.functions as func

from animesentinel_video_service.services.video_service import VideoService

bp: func.Blueprint = func.Blueprint()


@bp.function_name(name="get_show")
@bp.route(route="shows/{show_id:int}", methods=["GET"])
def get_show(req: func.HttpRequest) -> func.HttpResponse:
    """Get a show's details and count the page hit

    Args:
        req (func.HttpRequest): HTTP request

    Returns:
        func.HttpResponse: HTTP response with show data
    """
    try:
        show_id = req.route_params.get('show_id')
        if not show_id:
            return func.HttpResponse(
                body="Show ID is required",
                status_code=400
            )

        show_id_int = int(show_id)
        video_service = VideoService()
        show = video_service.get_show(show_id_int)

        if not show:
            return func.HttpResponse(
                body="Show not found",
                status_code=404
            )

        return func.HttpResponse(
            body=json.dumps(show),
            status_code=200,
            headers={"Content-Type": "application/json"}
        )

    except ValueError:
        return func.HttpResponse(
            body="Invalid show ID format",
            status_code=400
        )
    except Exception as e:
        logging.error(f"get_show: Unhandled exception: {e}", exc_info=True)
        return func.HttpResponse(
            body="Internal server error",
            status_code=500
        )
