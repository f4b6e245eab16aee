# src/hubsig/config.py

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings for the demo receiver and logging (Pydantic v2).

    The gate itself takes its secret and options as constructor arguments;
    only the wiring in ``hubsig.demo`` reads these values.
    Env keys are prefixed with ``HUBSIG_``, e.g. HUBSIG_SECRET, HUBSIG_ALGORITHM.
    """

    model_config = SettingsConfigDict(
        env_prefix="HUBSIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------------------------
    # App
    # ------------------------------------------------------------------------------------
    PROJECT_NAME: str = Field(default="hubsig")
    ENVIRONMENT: str = Field(default="dev")  # dev|staging|prod
    HOST: str = Field(default="127.0.0.1")
    PORT: int = Field(default=8080)

    # ------------------------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------------------------
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: Optional[Literal["json", "console"]] = Field(default=None)

    # ------------------------------------------------------------------------------------
    # Signature gate
    # ------------------------------------------------------------------------------------
    SECRET: Optional[SecretStr] = Field(default=None, description="Shared webhook secret; required by the demo app")
    ALGORITHM: str = Field(default="sha256")  # sha1 | sha256
    HEADER: Optional[str] = Field(default=None, description="Defaults to the algorithm's header")

    # ------------------------------------------------------------------------------------
    # Helper properties
    # ------------------------------------------------------------------------------------
    @property
    def is_dev(self) -> bool:
        return self.ENVIRONMENT.lower() in {"dev", "development", "local"}

    @property
    def is_prod(self) -> bool:
        return self.ENVIRONMENT.lower() in {"prod", "production"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
