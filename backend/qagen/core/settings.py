"""
アプリケーション設定（環境変数・定数の一元管理）

【初心者向け】
- Pydantic Settings: 環境変数や.envを読んで型付きで扱うための仕組み
- ここで定義した値は qagen.core.settings.settings から参照できる
- 主な分類: CORS, ドキュメント, Q&A生成, Ollama(LLM)
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """
    アプリケーション設定クラス
    環境変数（または.env）の値が自動でここにマッピングされる
    """

    # CORS設定
    cors_origins: List[str] = ["http://localhost:3000"]

    # ドキュメントディレクトリ（HTTP経由で指定されたファイル名はここを基準に解決）
    docs_dir: str = Field(
        default="docs",
        alias="DOCS_DIR",
        description="Q&A生成対象のドキュメントを置くディレクトリ"
    )

    # Q&A生成設定
    qa_max_attempts: int = Field(
        default=3,
        alias="QA_MAX_ATTEMPTS",
        description="1チャンクあたりの生成リクエスト最大試行回数"
    )
    qa_retry_delay_sec: float = Field(
        default=1.0,
        alias="QA_RETRY_DELAY_SEC",
        description="再試行前の待機秒数（固定、バックオフなし）"
    )
    qa_file_suffix: str = Field(
        default="_qa",
        alias="QA_FILE_SUFFIX",
        description="Q&Aファイル名の接尾辞（例: guide.md → guide_qa.jsonl）"
    )

    # Ollama設定（環境変数名を明示的に指定して事故防止）
    ollama_base_url: str = Field(
        default="http://localhost:11434",
        alias="OLLAMA_BASE_URL",
        description="Ollama APIのベースURL"
    )
    ollama_model: str = Field(
        default="qwen2.5:14b",
        alias="OLLAMA_MODEL",
        description="使用するOllamaモデル名"
    )
    ollama_timeout_sec: int = Field(
        default=300,
        alias="OLLAMA_TIMEOUT_SEC",
        description="Ollama API呼び出しのタイムアウト秒数（長いチャンクを考慮して長め）"
    )

    # Pydantic v2の設定（Configクラスの代わりにmodel_configを使用）
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,  # Fieldのaliasとフィールド名の両方で読み込み可能
        extra="ignore"  # 未定義の環境変数を無視
    )


# グローバル設定インスタンス
settings = Settings()
