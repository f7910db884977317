from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
import pydantic
from pydantic import BaseModel
from sqlmodel import Session

from birthdays.core.db import get_session
from birthdays.core.errors import BirthdayServiceException, NotFoundError, ValidationError
from birthdays.core.logging_config import get_logger
from birthdays.services.birthdays import get_birthday_message, save_birthday
from birthdays.services.user_store import UserStore
from birthdays.services.validation import parse_date_of_birth, validate_username

logger = get_logger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal server error."

class DateOfBirthIn(BaseModel):
    dateOfBirth: Optional[str] = None

class BirthdayMessage(BaseModel):
    message: str

def get_today() -> date:
    """reference date for validation and countdowns, time of day discarded"""
    return date.today()

def get_user_store(session: Session = Depends(get_session)) -> UserStore:
    return UserStore(session)

def valid_username(username: str) -> str:
    result = validate_username(username)
    if not result.valid:
        raise HTTPException(status_code=result.status_code, detail=result.message)
    return username

async def read_date_of_birth(
    request: Request,
    username: str = Depends(valid_username),
    today: date = Depends(get_today),
) -> date:
    """parse {"dateOfBirth": "YYYY-MM-DD"} from the body, after the username passed"""
    body = await request.body()
    if not body.strip():
        logger.warning(f"empty request body for {username!r}")
        raise HTTPException(status_code=400, detail="Request body cannot be empty.")

    try:
        payload = DateOfBirthIn.model_validate_json(body)
    except pydantic.ValidationError:
        logger.warning(f"invalid request body for {username!r}")
        raise HTTPException(status_code=400, detail="Invalid request body.")

    try:
        return parse_date_of_birth(payload.dateOfBirth, today)
    except ValidationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/{username}", status_code=204, response_class=Response)
def save_user(
    username: str = Depends(valid_username),
    date_of_birth: date = Depends(read_date_of_birth),
    store: UserStore = Depends(get_user_store),
):
    """create or update the user's date of birth"""
    try:
        save_birthday(store, username, date_of_birth)
    except BirthdayServiceException as e:
        logger.error(f"saving {username!r} failed: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return Response(status_code=204)

@router.get("/{username}", response_model=BirthdayMessage)
def get_user_birthday(
    username: str,
    store: UserStore = Depends(get_user_store),
    today: date = Depends(get_today),
):
    """days until the user's next birthday"""
    try:
        message = get_birthday_message(store, username, today)
    except NotFoundError:
        logger.warning(f"user {username!r} not found")
        raise HTTPException(status_code=404, detail="User not found.")
    except BirthdayServiceException as e:
        logger.error(f"reading {username!r} failed: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return BirthdayMessage(message=message)
