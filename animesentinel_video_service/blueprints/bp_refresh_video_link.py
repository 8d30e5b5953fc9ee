"""Refresh one video's link"""
import logging

import azure.functions as func

from animesentinel_video_service.config import REFRESH_QUEUE, STORAGE_CONNECTION_SETTING_NAME
from animesentinel_video_service.services.video_service import VideoService

bp: func.Blueprint = func.Blueprint()


@bp.function_name(name="refresh_video_link")
@bp.queue_trigger(
    arg_name="refreshmsg",
    queue_name=REFRESH_QUEUE,
    connection=STORAGE_CONNECTION_SETTING_NAME
)
def refresh_video_link(refreshmsg: func.QueueMessage) -> None:
    """Refresh the video link of one video

    Args:
        refreshmsg (func.QueueMessage): Video ID or compound key message
    """
    try:
        logging.info(f"=== PROCESSING REFRESH MESSAGE ID: {refreshmsg.id} ===")
        logging.info(f"Dequeue count: {refreshmsg.dequeue_count}")

        video_service: VideoService = VideoService()  # initialize video service
        video_service.refresh_video_link(refreshmsg)  # check, repair and persist the video link

        logging.info(f"=== SUCCESSFULLY PROCESSED REFRESH MESSAGE ID: {refreshmsg.id} ===")
    except Exception as e:  # catch any exceptions, log them, and re-raise them
        logging.error(
            f"=== ERROR PROCESSING REFRESH MESSAGE ID {refreshmsg.id} ===",
            exc_info=True
        )
        logging.error(f"Exception type: {type(e).__name__}")
        logging.error(f"Exception message: {str(e)}")
        raise
