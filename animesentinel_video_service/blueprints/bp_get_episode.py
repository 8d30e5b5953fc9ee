"""Get the data of an episode page"""
import json
import logging
import hashlib

import azure.functions as func

from animesentinel_video_service.services.video_service import VideoService

bp: func.Blueprint = func.Blueprint()


@bp.function_name(name="get_episode")
@bp.route(route="shows/{show_id:int}/{translation_type}/episodes/{episode_num:int}", methods=["GET"])
def get_episode(req: func.HttpRequest) -> func.HttpResponse:
    """Get an episode's mirrors, selected mirror and neighbouring episodes

    The optional "streamer" and "mirror" query parameters select a specific mirror,
    otherwise the best mirror is selected.

    Args:
        req (func.HttpRequest): HTTP request

    Returns:
        func.HttpResponse: HTTP response with episode data
    """
    try:
        show_id = req.route_params.get('show_id')
        translation_type = req.route_params.get('translation_type')
        episode_num = req.route_params.get('episode_num')
        if not show_id or not translation_type or not episode_num:
            return func.HttpResponse(
                body="Show ID, translation type and episode number are required",
                status_code=400
            )

        streamer_id = req.params.get('streamer')
        mirror = req.params.get('mirror')

        video_service = VideoService()
        episode = video_service.get_episode(
            int(show_id),
            translation_type,
            int(episode_num),
            streamer_id=streamer_id,
            mirror=int(mirror) if mirror is not None else None
        )

        if not episode:
            return func.HttpResponse(
                body="Episode not found",
                status_code=404
            )

        # Generate ETag for caching
        etag = hashlib.md5(json.dumps(episode, sort_keys=True).encode(), usedforsecurity=False).hexdigest()

        # Check if client has current version
        if_none_match = req.headers.get('If-None-Match')
        if if_none_match == etag:
            return func.HttpResponse(status_code=304)

        return func.HttpResponse(
            body=json.dumps(episode),
            status_code=200,
            headers={
                "Content-Type": "application/json",
                "Cache-Control": "public, max-age=300",  # Mirrors change when links are refreshed
                "ETag": etag
            }
        )

    except ValueError:
        return func.HttpResponse(
            body="Invalid show ID, episode number or mirror format",
            status_code=400
        )
    except Exception as e:
        logging.error(f"get_episode: Unhandled exception: {e}", exc_info=True)
        return func.HttpResponse(
            body="Internal server error",
            status_code=500
        )
