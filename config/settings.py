from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Helius (Solana RPC): mint/freeze authority + earliest activity
    helius_api_key: str = ""
    helius_rpc_url: str = ""  # overrides the default mainnet URL built from the key

    # HolderScan: holder count (Solana only)
    holderscan_api_key: str = ""

    # Upstream HTTP
    http_timeout_sec: float = 10.0
    news_max_items: int = 6

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000
    analyze_rate_limit: str = "30/minute"
    cors_origins: str = ""  # Comma-separated origins, empty = same-origin only
    api_debug: bool = False  # exposes /api/docs

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_to_file: bool = False


settings = Settings()
