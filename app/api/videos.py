import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.deps.common import get_engagement_store, get_ingestor, get_trace_id, get_video_service
from core.errors import DomainValidationError, NotFoundError
from core.models import VideoSnapshot
from engagement.store import EngagementStore
from service.dto import (
    CommentRequestDTO,
    CommentsResponseDTO,
    LikeRequestDTO,
    LikeResponseDTO,
    VideoDetailDTO,
    ViewResponseDTO,
)
from service.upload_service import UploadIngestor
from service.video_service import VideoQueryService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["videos"])


def _raise_http(error: Exception, trace_id: str) -> NoReturn:
    """Translate a domain error into the API error envelope"""
    if isinstance(error, DomainValidationError):
        status_code, code, message = 400, error.code, error.message
        logger.warning("Domain validation error", extra={
            "trace_id": trace_id,
            "error_code": code,
        })
    elif isinstance(error, NotFoundError):
        status_code, code, message = 404, error.code, error.message
        logger.info("Video not found", extra={"trace_id": trace_id, "error_code": code})
    else:
        status_code, code, message = 500, "INTERNAL_ERROR", "Internal server error"
        logger.error("Unexpected error", exc_info=error, extra={
            "trace_id": trace_id,
            "error_code": type(error).__name__,
        })

    raise HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "code": code,
                "message": message,
                "trace_id": trace_id
            }
        }
    )


@router.post("/videos", response_model=VideoSnapshot)
def upload_video(
    file: Optional[UploadFile] = File(None),
    title: str = Form(""),
    description: Optional[str] = Form(None),
    trace_id: str = Depends(get_trace_id),
    ingestor: UploadIngestor = Depends(get_ingestor),
) -> VideoSnapshot:
    """Store an uploaded video file and add it to the catalog"""
    if file is None:
        _raise_http(DomainValidationError("No file"), trace_id)

    try:
        record = ingestor.upload(
            file.file,
            file.filename or "",
            title,
            description,
            trace_id=trace_id,
        )
    except Exception as e:
        _raise_http(e, trace_id)
    finally:
        file.file.close()

    return record.with_counters(views=0, likes=0)


@router.get("/videos", response_model=List[VideoSnapshot])
def list_videos(videos: VideoQueryService = Depends(get_video_service)) -> List[VideoSnapshot]:
    """All videos, most recent first"""
    return videos.list_videos()


@router.get("/videos/{video_id}", response_model=VideoDetailDTO)
def get_video(
    video_id: str,
    trace_id: str = Depends(get_trace_id),
    videos: VideoQueryService = Depends(get_video_service),
) -> VideoDetailDTO:
    """Video record with live counters and comments"""
    try:
        return videos.get_video_detail(video_id)
    except Exception as e:
        _raise_http(e, trace_id)


@router.post("/videos/{video_id}/view", response_model=ViewResponseDTO)
def record_view(
    video_id: str,
    trace_id: str = Depends(get_trace_id),
    engagement: EngagementStore = Depends(get_engagement_store),
) -> ViewResponseDTO:
    try:
        return ViewResponseDTO(views=engagement.record_view(video_id))
    except Exception as e:
        _raise_http(e, trace_id)


@router.post("/videos/{video_id}/like", response_model=LikeResponseDTO)
def set_like(
    video_id: str,
    request: LikeRequestDTO,
    trace_id: str = Depends(get_trace_id),
    engagement: EngagementStore = Depends(get_engagement_store),
) -> LikeResponseDTO:
    try:
        return LikeResponseDTO(likes=engagement.set_like(video_id, request.like))
    except Exception as e:
        _raise_http(e, trace_id)


@router.post("/videos/{video_id}/comments", response_model=CommentsResponseDTO)
def post_comment(
    video_id: str,
    request: CommentRequestDTO,
    trace_id: str = Depends(get_trace_id),
    engagement: EngagementStore = Depends(get_engagement_store),
    videos: VideoQueryService = Depends(get_video_service),
) -> CommentsResponseDTO:
    """Add a comment and return the video's full thread"""
    try:
        engagement.add_comment(video_id, request.text, request.author)
        detail = videos.get_video_detail(video_id)
    except Exception as e:
        _raise_http(e, trace_id)

    logger.info("Comment posted", extra={"trace_id": trace_id, "video_id": video_id})
    return CommentsResponseDTO(comments=detail.comments)
