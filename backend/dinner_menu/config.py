from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "dinner-menu"
    env: str = "local"  # local | development | production
    log_level: str = "INFO"

    database_url: str = "sqlite:///./dinner_menu.db"

    llm_provider: str = "gemini"
    llm_model: str = "gemini/gemini-2.0-flash"
    gemini_api_key: str = ""
    llm_temperature: float = 0.7
    llm_top_k: int = 40
    llm_top_p: float = 0.95
    llm_max_output_tokens: int = 2048
    llm_timeout_s: int = 30
    # Failed generations are terminal for the request; the client retries manually.
    llm_num_retries: int = 0
    llm_call_logging: bool = True

    # Per client IP, in-process only.
    rate_limit_requests: int = 10
    rate_limit_window_s: float = 60.0

    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


settings = Settings()
