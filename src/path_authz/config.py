from pathlib import Path
from typing import Optional

import pydantic_settings


class AuthzConfig(pydantic_settings.BaseSettings):
    """Service settings, overridable through PATH_AUTHZ_* environment variables."""

    model_config = pydantic_settings.SettingsConfigDict(env_prefix="PATH_AUTHZ_")

    # Policy file to enforce; the service declines every request without one
    access_file: Optional[Path] = None
    # Refuse (rather than defer to another authorization layer) on denial or load failure
    authoritative: bool = True
    # Evaluate anonymous requests at all
    anonymous: bool = True
