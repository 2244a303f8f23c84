from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from safetrade import schemas
from safetrade.database import get_db
from safetrade.services import user_service
from safetrade.services.geocoding import Geocoder, get_geocoder
from safetrade.utils.security import authenticate_user, create_access_token

router = APIRouter(prefix="/auth", tags=["Authentication"])


# ===== REGISTER ENDPOINT =====

@router.post("/register", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def register(
    payload: schemas.RegisterRequest,
    db: Session = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    """Register a new CLIENT account."""
    return user_service.register_client(db, payload, geocoder=geocoder)


# ===== LOGIN ENDPOINT =====

@router.post("/login", response_model=schemas.Token)
def login(credentials: schemas.LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials and return access token"""
    user = authenticate_user(db, credentials.email.strip().lower(), credentials.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is deactivated")

    access_token = create_access_token(data={"sub": user.email, "role": user.role})
    return schemas.Token(access_token=access_token, token_type="bearer", role=user.role)
