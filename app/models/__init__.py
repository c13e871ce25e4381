from app.models.project_settings import ProjectSettings
from app.models.release import Release
from app.models.repository import Repository

__all__ = ["ProjectSettings", "Repository", "Release"]
