from pydantic_settings import BaseSettings
from dotenv import load_dotenv


load_dotenv()


class Settings(BaseSettings):
    app_name: str = "EcoBrand API"
    debug: bool = False
    database_url: str = "sqlite:///./ecobrand.db"
    host: str = "127.0.0.1"
    port: int = 8000
    allowed_hosts: str = ""
    log_file: str = "logs/application.log"
    log_level: str = "INFO"
    cache_ttl_seconds: int = 300
    search_result_limit: int = 10
    suggestion_limit: int = 8
    alternatives_default_count: int = 4
    alternatives_max_count: int = 8
    auto_create_tables: bool = True


settings = Settings()

if not settings.database_url:
    raise RuntimeError("Database URL not configured.")
