from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "framer"
    env: str = "local"
    log_level: str = "INFO"

    storage_root: str = "data"
    max_upload_bytes: int = 25 * 1024 * 1024

    # 0 means one worker per CPU.
    blur_workers: int = 0
    resample_filter: str = "lanczos"  # lanczos|bicubic|bilinear|nearest

    default_scale: float = 110.0
    default_background: str = "colr:black"
    default_shadow_color: str = "black"
    default_shadow_radius: float = 25.0
    default_shadow_opacity: float = 1.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
