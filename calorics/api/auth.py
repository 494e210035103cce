import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from calorics.api.errors import internal_error, to_http_error
from calorics.deps import get_db
from calorics.schemas.common import MessageResponse
from calorics.schemas.user import LoginRequest, LoginResponse, RegisterRequest
from calorics.services import auth
from calorics.services.errors import CaloricsError
from calorics.services.profile import build_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=MessageResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    try:
        auth.register_user(
            db,
            name=payload.name,
            email=payload.email.strip().lower(),
            password=payload.password,
            gender=payload.gender,
            birthday=payload.birthday,
            weight=payload.weight,
            height=payload.height,
            waist=payload.waist,
            neck=payload.neck,
            hip=payload.hip,
            goal=payload.goal,
        )
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[AUTH] Error in register: {e}", exc_info=True)
        raise internal_error()

    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = auth.authenticate(db, payload.email.strip().lower(), payload.password)
        token = auth.create_access_token(user.id)
        return LoginResponse(token=token, user=build_profile(user))
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[AUTH] Error in login: {e}", exc_info=True)
        raise internal_error()
