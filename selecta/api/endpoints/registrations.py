"""Registration API: thin routes delegating to RegistrationService.

POST /register reads the multipart form itself so that absent or
mistyped parts surface as the 400 "Missing required fields" error rather
than a framework validation error.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from starlette.datastructures import FormData, UploadFile

from selecta.api.dependencies import get_registration_service
from selecta.application.dtos.registration import UploadedFile
from selecta.application.use_cases.registrations import (
    RegistrationForm,
    RegistrationService,
)
from selecta.core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    REGISTRATION_SUCCESS_MESSAGE,
)
from selecta.schemas.registration import (
    RegisterResponse,
    RegistrationDetailResponse,
    RegistrationItem,
    RegistrationListResponse,
    RegistrationReceipt,
)

router = APIRouter()
# Mounted only for the database backend (the file log has no lookup).
lookup_router = APIRouter()


def _text_field(form: FormData, name: str) -> str | None:
    value = form.get(name)
    return value if isinstance(value, str) else None


async def _file_field(form: FormData, name: str) -> UploadedFile | None:
    value = form.get(name)
    if not isinstance(value, UploadFile):
        return None
    return UploadedFile(
        field=name,
        filename=value.filename or "",
        content_type=value.content_type or "",
        content=await value.read(),
    )


def parse_page_param(raw: str | None, default: int, maximum: int | None = None) -> int:
    """Parse a 1-indexed query value; non-integers and values below 1 fall back to default."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        value = default
    if value < 1:
        value = default
    if maximum is not None:
        value = min(value, maximum)
    return value


@router.post("/register", response_model=RegisterResponse, response_model_exclude_none=True)
async def register(
    request: Request,
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> RegisterResponse:
    """Accept a registration: fields, location JSON and KTP (plus house photo on the database backend)."""
    async with request.form() as form:
        submission = RegistrationForm(
            homepass_id=_text_field(form, "homepassId"),
            customer_name=_text_field(form, "customerName"),
            phone_number=_text_field(form, "phoneNumber"),
            location=_text_field(form, "location"),
            ktp_file=await _file_field(form, "ktpFile"),
            house_photo_file=await _file_field(form, "housePhotoFile"),
        )
    result = await service.register(submission)
    record = result.record
    return RegisterResponse(
        message=REGISTRATION_SUCCESS_MESSAGE,
        data=RegistrationReceipt(
            homepass_id=record.homepass_id,
            customer_name=record.customer_name,
            submitted_at=record.submitted_at,
            reference_id=result.reference_id,
            ktp_file_name=record.ktp_file_name,
            house_photo_file_name=record.house_photo_file_name,
        ),
    )


@router.get(
    "/registrations",
    response_model=RegistrationListResponse,
    response_model_exclude_none=True,
)
async def list_registrations(
    service: Annotated[RegistrationService, Depends(get_registration_service)],
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> RegistrationListResponse:
    """List registrations. The database backend paginates (page, limit); the file backend returns everything."""
    result = await service.list_registrations(
        parse_page_param(page, DEFAULT_PAGE),
        parse_page_param(limit, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE),
    )
    items = [RegistrationItem.from_record(r) for r in result.items]
    if result.page_size is None:
        return RegistrationListResponse(data=items, count=len(items))
    return RegistrationListResponse(
        data=items,
        count=len(items),
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@lookup_router.get(
    "/registrations/{homepass_id}",
    response_model=RegistrationDetailResponse,
    response_model_exclude_none=True,
)
async def get_registration(
    homepass_id: str,
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> RegistrationDetailResponse:
    """Return one registration by exact Homepass ID; 404 when unknown."""
    record = await service.get_registration(homepass_id)
    return RegistrationDetailResponse(data=RegistrationItem.from_record(record))
