from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Query, Request

from ..schemas import NotificationOut

router = APIRouter(
    prefix="/api/v1/notifications",
    tags=["notifications"],
)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[NotificationOut],
    summary="Recent Notifications",
    description="Confirmation messages for the most recent task mutations, newest first.",
)
def list_notifications(
    request: Request,
    limit: int = Query(20, ge=0, le=200, description="Maximum number of notifications to return"),
) -> List[NotificationOut]:
    notifier = request.app.state.store.notifier
    return [NotificationOut(**asdict(event)) for event in notifier.recent(limit)]
