from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Content store (single JSON document)
    CONTENT_STORE_PATH: str = "data/site.json"

    # Showcase deployments: every write is refused
    DEMO_MODE: bool = False

    # Asset host (S3 / MinIO)
    S3_BUCKET: str = ""
    S3_ENDPOINT_URL: str | None = None  # backend→MinIO (e.g. http://minio:9000)
    S3_PUBLIC_ENDPOINT: str | None = None  # browser→MinIO (e.g. http://localhost:9000)
    AWS_REGION: str = "me-south-1"
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    MEDIA_FOLDER: str = "cms_uploads"

    # Stock photos (Pexels)
    PEXELS_API_KEY: str = ""
    PEXELS_API_URL: str = "https://api.pexels.com/v1/search"

    # Outbound HTTP
    HTTP_TIMEOUT: float = 10.0

    # Public renderers re-fetch the theme stylesheet on this interval (seconds)
    THEME_POLL_INTERVAL: int = 30

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:8000"

    # App
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]


settings = Settings()
