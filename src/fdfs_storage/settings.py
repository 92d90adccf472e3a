"""存储配置。所有环境变量集中管理。"""
from __future__ import annotations
import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # === App ===
    app_env: str = "development"
    log_level: str = "INFO"

    # === FastDFS ===
    fdfs_enabled: bool = False
    fdfs_web_server_url: str = "localhost:8888"
    fdfs_default_group: str = "group1"
    fdfs_thumb_width: int = 150
    fdfs_thumb_height: int = 150

    # === Aliyun OSS (S3 兼容) ===
    oss_enabled: bool = False
    oss_endpoint: str = "localhost:9000"
    oss_access_key_id: str = ""
    oss_access_key_secret: str = ""
    oss_intranet: str = ""
    oss_open_intranet: int = 0  # 1: 内网上传, 0: 外网
    oss_secure: bool = False

    # === Paths ===
    local_storage_dir: str = "/tmp/fdfs-storage"
    tmp_dir: str = os.path.join(os.getcwd(), "data", "tmp")

    # === HTTP ===
    http_timeout_seconds: int = 30

    @property
    def oss_upload_endpoint(self) -> str:
        if self.oss_open_intranet == 1 and self.oss_intranet:
            return self.oss_intranet
        return self.oss_endpoint

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
