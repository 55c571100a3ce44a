from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    WEB_DIR: str = "web"

    # Side-view preview viewport (px)
    SVG_WIDTH: int = 800
    SVG_HEIGHT: int = 600


settings = Settings()
