"""Core constants: backend names, upload rules and pagination defaults.

Single source of truth for literal values shared by config, validation
and the API layer.
"""

REGISTRATION_BACKEND_DATABASE = "database"
REGISTRATION_BACKEND_FILE = "file"
REGISTRATION_BACKENDS = frozenset({REGISTRATION_BACKEND_DATABASE, REGISTRATION_BACKEND_FILE})

# Uploads
DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
IMAGE_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png")
KTP_MIME_TYPES = (*IMAGE_MIME_TYPES, "application/pdf")
HOUSE_PHOTO_MIME_TYPES = IMAGE_MIME_TYPES
KTP_FILE_PREFIX = "ktp"
HOUSE_PHOTO_FILE_PREFIX = "house"

# Listing
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

# Response literals
REFERENCE_ID_PREFIX = "NSF"
REGISTRATION_SUCCESS_MESSAGE = "Pendaftaran berhasil disimpan"

# File-backed store layout (under data_dir)
REGISTRATION_LOG_FILENAME = "registrations.jsonl"
REGISTRATION_SNAPSHOT_PREFIX = "registration_"
