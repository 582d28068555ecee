from pydantic_settings import BaseSettings
import multiprocessing


class Settings(BaseSettings):
    app_name: str = "Gardenchat Backend"
    environment: str = "development"
    host: str = "127.0.0.1"
    port: int = 8000
    # SQLite database URL, default stored under gardenchat/sqlite/gardenchat.db
    database_url: str = "sqlite:///./gardenchat/sqlite/gardenchat.db"
    # DB connection pool settings
    pool_size: int = max(5, multiprocessing.cpu_count())
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 3600  # Recycle connections after 1 hour
    pool_timeout: int = 30
    sqlite_timeout: int = 20
    sqlite_check_same_thread: bool = False  # Stores run queries from executor threads

    # Generation capability (any OpenAI-compatible endpoint, e.g. DeepSeek)
    openai_api_key: str | None = None
    llm_base_url: str | None = None
    llm_timeout_seconds: float = 60.0
    intent_model: str = "gpt-4o-mini"
    intent_temperature: float = 0.0
    answer_model: str = "gpt-4o"
    answer_temperature: float = 0.6
    answer_max_tokens: int = 1000

    # Pipeline tuning
    min_question_length: int = 3
    plant_page_size: int = 6
    tip_search_limit: int = 6
    topic_match_threshold: int = 2
    description_char_budget: int = 300  # Plant description cut-off inside the answer prompt
    field_char_budget: int = 100  # Cut-off for every other string field of a plant

    class Config:
        env_file = ".env"
        extra = "ignore"  # Ignore extra environment variables that aren't in the Settings class


settings = Settings()
