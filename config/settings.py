from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Load .env file into os.environ BEFORE pydantic reads it
# This keeps the DB_* variables used by the original Node deployment working
load_dotenv()


class Settings(BaseSettings):
    # Database (MariaDB). DATABASE_URL wins over the DB_* parts when set.
    DATABASE_URL: Optional[str] = None
    DB_DRIVER: str = "mariadb+pymysql"
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_NAME: str = "sos_content"

    # Pool bounds all in-flight database work across requests
    DB_POOL_SIZE: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300

    # API server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 3001
    ALLOWED_ORIGINS: str = "*"

    # Bootstrap account, created only when the users table is empty
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin"
    BCRYPT_ROUNDS: int = 10

    LOG_LEVEL: str = "INFO"

    MAX_WORKER_THREADS: int = 4  # Max threads for concurrent per-table reads

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # ignore unknown env vars instead of raising errors
    )

    def database_url(self) -> str:
        """Return the SQLAlchemy URL for the content database."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            self.DB_DRIVER,
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)


settings = Settings()
