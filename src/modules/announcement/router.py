import logging

from fastapi import APIRouter, HTTPException

from src.modules.announcement.exceptions import AnnouncementError, UnknownCategoryError
from src.modules.announcement.schemas import Feed
from src.modules.announcement.service import announcement_service
from src.modules.catalog.models import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Feed)
async def default_announcement_feed() -> Feed:
    return await announcement_feed(DEFAULT_CATEGORY)


@router.get("/{category}", response_model=Feed)
async def announcement_feed(category: str) -> Feed:
    try:
        return await announcement_service.get_feed(category)
    except UnknownCategoryError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except AnnouncementError as exc:
        logger.exception("All announcement sources failed for %s", category)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
