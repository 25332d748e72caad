"""
設定管理モジュール

関連クラス:
  - server.dependencies: この設定でロガーとTodoStoreを初期化
  - server.run: uvicornの起動パラメータを使用
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from src.todo.store import DEFAULT_PAGE_SIZE


@dataclass
class ServerConfig:
    """HTTPサーバー設定"""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


@dataclass
class StoreConfig:
    """TodoStore設定"""

    default_page_size: int = DEFAULT_PAGE_SIZE


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # サーバー設定
    server: ServerConfig = None  # type: ignore

    # ストア設定
    store: StoreConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/todo_backend.log"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.server is None:
            self.server = ServerConfig()
        if self.store is None:
            self.store = StoreConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス（ファイルが無い場合はデフォルト値）
        """
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "app_config.yaml"

        if not Path(config_path).exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        server_data = yaml_data.get("server", {})
        store_data = yaml_data.get("store", {})
        log_data = yaml_data.get("log", {})

        return cls(
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=int(server_data.get("port", 8000)),
                reload=bool(server_data.get("reload", False)),
            ),
            store=StoreConfig(
                default_page_size=int(
                    store_data.get("default_page_size", DEFAULT_PAGE_SIZE)
                ),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/todo_backend.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            server=ServerConfig(
                host=os.getenv("TODO_BACKEND_HOST", "0.0.0.0"),
                port=int(os.getenv("TODO_BACKEND_PORT", "8000")),
            ),
            store=StoreConfig(
                default_page_size=int(
                    os.getenv("TODO_BACKEND_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))
                ),
            ),
            log_level=os.getenv("TODO_BACKEND_LOG_LEVEL", "INFO"),
            log_file=os.getenv("TODO_BACKEND_LOG_FILE") or None,
        )
