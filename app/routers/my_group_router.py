# /app/routers/my_group_router.py

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_student
from ..core.exceptions import NotAMemberError
from ..core.http_errors import raise_for_errors
from ..models import page_model
from ..models.group_model import JoinRequest
from ..models.user_model import User
from ..services.database_service import DatabaseService, get_db_service
from ..services.membership_service import MyGroupPage

router = APIRouter()


def _snapshot(page: MyGroupPage) -> page_model.MyGroupView:
    return page_model.MyGroupView(
        membership=page.membership,
        groups=page.groups,
        actions=[page_model.MyGroupAction(**action) for action in page.available_actions],
        loading=page.loading,
        notifications=page.notifier.notifications,
    )


@router.get("", response_model=page_model.MyGroupView, summary="Get My Group")
async def get_my_group(db: DatabaseService = Depends(get_db_service), current_user: User = Depends(get_current_student)):
    """
    Returns the caller's group, or every group to choose from when the caller
    is in none. Partial failures are reported as notifications.
    """
    page = MyGroupPage(db, current_user)
    await page.refresh()
    return _snapshot(page)


@router.post("/join", response_model=page_model.MyGroupView, summary="Join a Group")
async def join_group(payload: JoinRequest, db: DatabaseService = Depends(get_db_service), current_user: User = Depends(get_current_student)):
    page = MyGroupPage(db, current_user)
    await page.refresh()
    await page.join(payload.group_id)
    # "Already a member" is reported as a normal notification, not an error.
    raise_for_errors(page.notifier)
    return _snapshot(page)


@router.post("/leave", response_model=page_model.MyGroupView, summary="Leave My Group")
async def leave_group(db: DatabaseService = Depends(get_db_service), current_user: User = Depends(get_current_student)):
    page = MyGroupPage(db, current_user)
    await page.refresh()
    raise_for_errors(page.notifier)
    try:
        await page.leave()
    except NotAMemberError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    raise_for_errors(page.notifier)
    return _snapshot(page)
