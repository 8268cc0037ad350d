from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "0.0.0.0"  # noqa: S104
    # Plain PORT is what most hosting platforms export
    port: int = Field(default=8080, validation_alias=AliasChoices("GATEHOUSE_PORT", "PORT"))
    debug: bool = False
    static_root: str = "website"  # Content root holding pages/, styles/, images/, scripts/

    model_config = {
        "env_file": [".env"],
        "env_prefix": "GATEHOUSE_",
        "extra": "ignore",
    }
