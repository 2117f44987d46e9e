from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "Spark2Scale"
    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MiB
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 8000
    # Base of the public URL written into current_path / version path.
    public_base_url: str = "http://127.0.0.1:8000"
    # Default collaborator base URL used by spark2scale.client.
    api_base_url: str = "http://127.0.0.1:8000/api"
    request_timeout_seconds: float = 10.0
    cors_origins: list[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]

    @property
    def db_path(self) -> Path:
        return self.data_path / "db.sqlite"

    @property
    def storage_dir(self) -> Path:
        return self.data_path / "storage"

    model_config = {"env_prefix": "SPARK2SCALE_"}


settings = Settings()
