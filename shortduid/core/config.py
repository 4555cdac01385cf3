from pydantic import Field
from pydantic_settings import BaseSettings

from shortduid.utils.sequence import BATCH_CAPACITY


class Settings(BaseSettings):
    ENV: str = "dev"
    SHARD_ID: int = 0
    SALT: str = "39622feb2b3e7aa7208f50f45ec36fd513baadad6977b53295a3b28aeaed4a54"
    EPOCH: int = 1433116800000
    LOG_LEVEL: str = "INFO"
    # Larger batches would be cut down by the per-tick modulo rule
    MAX_BATCH_SIZE: int = Field(BATCH_CAPACITY, ge=1, le=BATCH_CAPACITY)

    class Config:
        env_file = ".env"


settings = Settings()
