
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    qdrant_url: str = ""
    qdrant_api_key: str | None = None
    qdrant_collection: str = "chat_with_me"
    qdrant_timeout: float = 30.0

    embedding_backend: str = "ollama"
    ollama_url: str = "http://127.0.0.1:11434"
    embedding_model: str = "nomic-embed-text"
    embedding_dim: int = 768
    embedding_timeout: float = 30.0

    llm_base_url: str = "http://127.0.0.1:11434/v1"
    llm_model: str = "mistral:7b-instruct-q4_K_M"

    docs_path: str = "./data"
    chunk_max_chars: int = 3500
    chunk_overlap: int = 200
    embed_concurrency: int = 6
    upsert_batch_size: int = 48

    router_config_path: str = "router_config.json"

    # Prompts
    system_prompt_path: str = "prompts/system_prompt.md"
    answer_policies_path: str = "prompts/answer_policies.md"
    append_policies: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
