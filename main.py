import logging
import os
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, Depends, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from bookings import BookingService
from database import init_db, get_session
from errors import (
    ArtistNotFoundError,
    BookingNotFoundError,
    EmailTakenError,
    SlotUnavailableError,
)
from models import User
from schemas import (
    ArtistRead,
    BookingCreate,
    BookingRead,
    BookingUpdate,
    UserCreate,
    UserRead,
    WorkRead,
)
from stores import SQLBookingStore, SQLCatalogStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Tattoo studio booking API started")
    yield


app = FastAPI(title="Tattoo Studio Booking", lifespan=lifespan)


def get_booking_service(session: AsyncSession = Depends(get_session)) -> BookingService:
    return BookingService(SQLBookingStore(session))


def get_catalog_store(session: AsyncSession = Depends(get_session)) -> SQLCatalogStore:
    return SQLCatalogStore(session)


# --- Catalogue ---
@app.get("/artists", response_model=List[ArtistRead])
async def list_artists(catalog: SQLCatalogStore = Depends(get_catalog_store)):
    return await catalog.list_artists()


@app.get("/works", response_model=List[WorkRead])
async def list_works(
    artist_id: Optional[int] = Query(default=None, gt=0),
    take: int = Query(default=20, ge=1, le=100),
    catalog: SQLCatalogStore = Depends(get_catalog_store),
):
    return await catalog.list_works(artist_id, take)


# --- Availability ---
@app.get("/availability", response_model=Dict[str, List[str]])
async def get_availability(
    artist_id: int = Query(gt=0),
    year: int = Query(gt=0, le=9998),
    month: int = Query(gt=0, le=12),
    service: BookingService = Depends(get_booking_service),
):
    return await service.availability(artist_id, year, month)


# --- Bookings ---
@app.get("/bookings", response_model=List[BookingRead])
async def list_bookings(service: BookingService = Depends(get_booking_service)):
    return [BookingRead.model_validate(b) for b in await service.list_bookings()]


@app.post("/bookings", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    try:
        booking = await service.create_booking(booking_data)
    except ArtistNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except SlotUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return BookingRead.model_validate(booking)


@app.put("/bookings/{booking_id}", response_model=BookingRead)
async def update_booking(
    booking_id: int,
    booking_data: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
):
    try:
        booking = await service.update_booking(booking_id, booking_data)
    except (BookingNotFoundError, ArtistNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except SlotUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return BookingRead.model_validate(booking)


@app.delete("/bookings/{booking_id}")
async def delete_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
):
    try:
        await service.delete_booking(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return {"ok": True}


# --- Users ---
@app.get("/users", response_model=Union[UserRead, List[UserRead], None])
async def list_users(
    email: Optional[str] = None,
    catalog: SQLCatalogStore = Depends(get_catalog_store),
):
    if email:
        # null when not found
        return await catalog.get_user_by_email(email)
    return await catalog.list_users()


@app.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    catalog: SQLCatalogStore = Depends(get_catalog_store),
):
    try:
        return await catalog.add_user(User(name=user_data.name, email=user_data.email))
    except EmailTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
