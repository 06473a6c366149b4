from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    PGHOST: str = "localhost"
    PGDATABASE: str = "airport_reservations"
    PGUSER: str = "postgres"
    PGPASSWORD: str = ""
    PGSSLMODE: str = "prefer"
    LOCK_TIMEOUT_MS: int = 5000
    
    # Security (tokens are issued by the external authentication service)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    
    # Ticketing
    BOARDING_CREDENTIAL_PREFIX: str = "EB"
    CREDENTIAL_MAX_ATTEMPTS: int = 3
    FREE_BAGGAGE_ALLOWANCE_KG: int = 20
    
    # Application
    PROJECT_NAME: str = "Airport Ticket Issuance Service"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    
    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.PGUSER}:{self.PGPASSWORD}@{self.PGHOST}/{self.PGDATABASE}?sslmode={self.PGSSLMODE}"
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
