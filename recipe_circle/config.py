from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RECIPE_CIRCLE_")

    env: Env = Env.local
    db_url: str = "sqlite:///./recipe_circle.db"
    default_page_size: int = 20
    max_page_size: int = 100


@lru_cache
def get_config() -> Config:
    return Config()
