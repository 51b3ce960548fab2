"""Registration field and upload validation.

Field rules live on pydantic models; each field validator returns the list
of issues it found (empty when valid). validate_registration validates
every field, so a submission with several bad fields reports all of them
at once. Issue shape: {"path": [...], "message": str, "code": str}.
"""

from typing import Annotated, Any

from pydantic import (
    AllowInfNan,
    BaseModel,
    ConfigDict,
    Field,
    Strict,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from selecta.application.dtos.registration import (
    Location,
    RegistrationInput,
    UploadedFile,
)
from selecta.domain.exceptions import (
    FileValidationException,
    RegistrationValidationException,
)

HOMEPASS_ID_PATTERN = r"^[A-Z0-9]{4}-[A-Z0-9]{5}-H[0-9]{5}$"
PHONE_PATTERN = r"^0[0-9]+$"

PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 13
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

HomepassId = Annotated[str, StringConstraints(strict=True, pattern=HOMEPASS_ID_PATTERN)]
PhoneNumber = Annotated[
    str,
    StringConstraints(
        strict=True,
        min_length=PHONE_MIN_LENGTH,
        max_length=PHONE_MAX_LENGTH,
        pattern=PHONE_PATTERN,
    ),
]
CustomerName = Annotated[
    str,
    StringConstraints(
        strict=True,
        strip_whitespace=True,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
    ),
]
# Strict rejects booleans; ints too large for a float fail as float_type.
# The bounds keep values inside the DECIMAL(10,8)/(11,8) columns.
Latitude = Annotated[float, Strict(), AllowInfNan(False), Field(ge=-90, le=90)]
Longitude = Annotated[float, Strict(), AllowInfNan(False), Field(ge=-180, le=180)]
Address = Annotated[str, StringConstraints(strict=True, min_length=1)]


class LocationIn(BaseModel):
    """Decoded location JSON. Extra keys are ignored."""

    lat: Latitude
    lng: Longitude
    address: Address


class RegistrationSubmission(BaseModel):
    """Text fields of a submission, keyed by their form names (camelCase)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    homepass_id: HomepassId
    customer_name: CustomerName
    phone_number: PhoneNumber
    location: LocationIn


Issue = dict[str, Any]

_ISSUE_CODES = {
    "string_too_short": "too_small",
    "string_too_long": "too_big",
    "string_pattern_mismatch": "invalid_string",
    "greater_than_equal": "too_small",
    "less_than_equal": "too_big",
}

_MESSAGES = {
    ("homepassId", "string_pattern_mismatch"): "Format Homepass ID tidak valid",
    ("customerName", "string_too_short"): "Nama minimal 2 karakter",
    ("customerName", "string_too_long"): "Nama maksimal 100 karakter",
    ("phoneNumber", "string_too_short"): "Nomor handphone minimal 10 digit",
    ("phoneNumber", "string_too_long"): "Nomor handphone maksimal 13 digit",
    ("phoneNumber", "string_pattern_mismatch"): (
        "Nomor handphone harus dimulai dengan 0 dan hanya berisi angka"
    ),
    ("address", "string_too_short"): "Alamat tidak boleh kosong",
    ("lat", "greater_than_equal"): "Latitude harus antara -90 dan 90",
    ("lat", "less_than_equal"): "Latitude harus antara -90 dan 90",
    ("lng", "greater_than_equal"): "Longitude harus antara -180 dan 180",
    ("lng", "less_than_equal"): "Longitude harus antara -180 dan 180",
}

# Wrong type, missing or non-finite values, keyed by the last path element.
_TYPE_MESSAGES = {
    "homepassId": "homepassId harus berupa teks",
    "customerName": "customerName harus berupa teks",
    "phoneNumber": "phoneNumber harus berupa teks",
    "location": "Lokasi harus berupa objek",
    "lat": "lat harus berupa angka",
    "lng": "lng harus berupa angka",
    "address": "Alamat harus berupa teks",
}


def _to_issues(error: ValidationError, prefix: tuple[str, ...] = ()) -> list[Issue]:
    issues = []
    for err in error.errors():
        path = [*prefix, *(str(part) for part in err["loc"])]
        field = path[-1] if path else ""
        message = _MESSAGES.get((field, err["type"])) or _TYPE_MESSAGES.get(
            field, err["msg"]
        )
        issues.append(
            {
                "path": path,
                "message": message,
                "code": _ISSUE_CODES.get(err["type"], "invalid_type"),
            }
        )
    return issues


_homepass_id_adapter = TypeAdapter(HomepassId)
_phone_adapter = TypeAdapter(PhoneNumber)
_customer_name_adapter = TypeAdapter(CustomerName)


def _check(adapter: TypeAdapter, value: Any, field: str) -> list[Issue]:
    try:
        adapter.validate_python(value)
    except ValidationError as e:
        return _to_issues(e, (field,))
    return []


def validate_homepass_id(value: Any) -> list[Issue]:
    """Homepass ID must fully match XXXX-XXXXX-HNNNNN (uppercase alnum, literal H, 5 digits)."""
    return _check(_homepass_id_adapter, value, "homepassId")


def validate_phone(value: Any) -> list[Issue]:
    """Phone is 10-13 characters, starts with 0, digits only."""
    return _check(_phone_adapter, value, "phoneNumber")


def validate_customer_name(value: Any) -> list[Issue]:
    """Customer name, after trimming, is 2-100 characters."""
    return _check(_customer_name_adapter, value, "customerName")


def validate_location(value: Any) -> list[Issue]:
    """Location is an object with in-range numeric lat/lng and a non-empty address string."""
    try:
        LocationIn.model_validate(value)
    except ValidationError as e:
        return _to_issues(e, ("location",))
    return []


def validate_registration(data: dict[str, Any]) -> RegistrationInput:
    """Validate all registration fields and return the normalized input.

    Args:
        data: Raw fields: homepassId, customerName, phoneNumber and the
            already JSON-decoded location.

    Returns:
        RegistrationInput with the trimmed name and a typed Location.

    Raises:
        RegistrationValidationException: With every issue across all fields.
    """
    try:
        submission = RegistrationSubmission.model_validate(data)
    except ValidationError as e:
        raise RegistrationValidationException(_to_issues(e)) from e
    return RegistrationInput(
        homepass_id=submission.homepass_id,
        customer_name=submission.customer_name,
        phone_number=submission.phone_number,
        location=Location(
            lat=submission.location.lat,
            lng=submission.location.lng,
            address=submission.location.address,
        ),
    )


def _describe_types(allowed_mime_types: tuple[str, ...]) -> str:
    labels = []
    for mime in allowed_mime_types:
        label = {"image/jpeg": "JPG", "image/jpg": "JPG", "image/png": "PNG"}.get(
            mime, mime.rsplit("/", 1)[-1].upper()
        )
        if label not in labels:
            labels.append(label)
    if len(labels) == 1:
        return labels[0]
    return f"{', '.join(labels[:-1])}{',' if len(labels) > 2 else ''} atau {labels[-1]}"


def validate_uploaded_file(
    file: UploadedFile,
    allowed_mime_types: tuple[str, ...],
    max_bytes: int,
) -> None:
    """Check an upload against a MIME allow-list and a byte-size ceiling.

    Raises:
        FileValidationException: Naming file.field; MIME is checked before size.
    """
    if file.content_type not in allowed_mime_types:
        raise FileValidationException(
            file.field,
            f"Format file tidak valid. Gunakan {_describe_types(allowed_mime_types)}.",
        )
    if file.size > max_bytes:
        max_mb = max_bytes // (1024 * 1024)
        raise FileValidationException(
            file.field,
            f"Ukuran file terlalu besar. Maksimal {max_mb}MB.",
        )
