import os
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from typing import List, Optional
from server.logger import log

# --- 1. optional .env file next to this module ---
dotenv_path = os.path.join(os.path.dirname(__file__), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
    log.info(".env file loaded successfully.")

DEFAULT_PORT = 3000
DEFAULT_HOST = '0.0.0.0'
DEFAULT_ENVIRONMENT = 'development'
DEFAULT_VERSION = '1.0.0'

# browser origins allowed to call the API with credentials
DEFAULT_CORS_ORIGINS = (
    'https://d3jx35gx2lx89p.cloudfront.net',
    'http://localhost:5173',
    'http://localhost:3000',
)
CORS_ALLOW_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
CORS_ALLOW_HEADERS = ['Content-Type', 'Authorization']


# read an environment variable, stripping whitespace and surrounding quotes
def _read_env(key: str) -> Optional[str]:
    val = os.getenv(key)
    if val is None:
        return None
    val = val.strip()
    if (val.startswith('"') and val.endswith('"')) or (val.startswith("'") and val.endswith("'")):
        val = val[1:-1]
    return val or None


class Settings(BaseModel):
    """Runtime configuration of the API service, resolved once at startup."""
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    environment: str = DEFAULT_ENVIRONMENT
    app_version: str = DEFAULT_VERSION
    cors_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    cors_allow_credentials: bool = True
    log_level: str = 'INFO'

    @property
    def is_development(self) -> bool:
        return self.environment == 'development'


def _parse_port(raw: Optional[str]) -> int:
    if raw is None:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        log.warning(f"Invalid PORT value {raw!r}; falling back to {DEFAULT_PORT}")
        return DEFAULT_PORT
    if not 0 < port < 65536:
        log.warning(f"PORT {port} out of range; falling back to {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port


def _parse_origins(raw: Optional[str]) -> List[str]:
    if raw is None:
        return list(DEFAULT_CORS_ORIGINS)
    origins = [item.strip().rstrip('/') for item in raw.split(',')]
    return [o for o in origins if o]


def load_settings() -> Settings:
    """Build a Settings object from the process environment."""
    settings = Settings(
        port=_parse_port(_read_env('PORT')),
        host=_read_env('HOST') or DEFAULT_HOST,
        environment=_read_env('NODE_ENV') or DEFAULT_ENVIRONMENT,
        app_version=_read_env('APP_VERSION') or DEFAULT_VERSION,
        cors_origins=_parse_origins(_read_env('CORS_ORIGINS')),
        log_level=_read_env('LOG_LEVEL') or 'INFO',
    )
    log.debug(f"Settings resolved: environment={settings.environment} port={settings.port}")
    return settings
