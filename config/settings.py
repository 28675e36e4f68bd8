from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Empty URLs select each provider's default production host
	EXCHANGEAPI_URL: str = ''
	CURRENCYLAYER_URL: str = ''
	CURRENCYLAYER_API_KEY: str = ''

	OPENAI_API_KEY: str = ''
	OPENAI_BASE_URL: str = ''
	OPENAI_MODEL: str = 'gpt-4o-2024-11-20'

	TARGET_CURRENCY: str = 'SEK'
	REQUEST_TIMEOUT: float = 10
	RETRY_ATTEMPTS: int = 3
	MAX_CONCURRENT_BUCKETS: int = 4

	LOG_LEVEL: str = 'INFO'
	LOG_FILE: str = ''

	# Application
	APP_NAME: str = 'Statement Currency Converter'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
