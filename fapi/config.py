from pydantic_settings import BaseSettings

from fapi.routes import BASE_URL


class Settings(BaseSettings):
    base_url: str = BASE_URL
    auth: str = ""
    timeout: int = 15000
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "FAPI_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
