from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Resume storage: "local" writes under upload_dir, "s3" uploads to s3_bucket
    blob_backend: str = "local"
    upload_dir: str = "uploads/resumes"
    upload_public_base_url: str = "/uploads/resumes"
    s3_bucket: str | None = None
    s3_key_prefix: str = "resumes/"
    aws_region: str = "us-east-1"

    # Listing endpoints
    default_page_size: int = 10
    max_page_size: int = 50

    # Request guards
    rate_limit_auth_per_min: int = 20
    rate_limit_upload_per_min: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
