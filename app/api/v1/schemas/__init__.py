from app.api.v1.schemas.repositories import AddRepositoryRequest, UpdateRepositoryRequest
from app.api.v1.schemas.settings import UpdateSettingsRequest

__all__ = [
    "AddRepositoryRequest",
    "UpdateRepositoryRequest",
    "UpdateSettingsRequest",
]
