"""
ドキュメント読み込みモジュール
"""
import logging
from pathlib import Path

from qagen.core.errors import DocumentNotFoundError, PersistenceError
from qagen.docs.models import Document

# ロガー設定
logger = logging.getLogger(__name__)


def load_text_file(file_path: Path) -> Document:
    """
    テキスト（.txt / .md など）ファイルを読み込む

    Args:
        file_path: ファイルパス

    Returns:
        Document

    Raises:
        DocumentNotFoundError: ファイルが存在しない場合
        PersistenceError: その他の読み込みエラー
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise DocumentNotFoundError(file_path, "ドキュメントが見つかりません")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"ドキュメント読み込みエラー: {file_path} - {type(e).__name__}: {e}")
        raise PersistenceError(file_path, f"読み込みに失敗しました: {e}") from e

    logger.info(f"ドキュメント読み込み: {file_path.name} ({len(text)}文字)")
    return Document(source=str(file_path), text=text)


def resolve_source(docs_dir: str, source: str) -> Path:
    """
    docs_dir 配下のファイル名を絶対パスに解決する

    Raises:
        ValueError: docs_dir の外を指している場合
    """
    base = Path(docs_dir).resolve()
    path = (base / source).resolve()
    if path != base and base not in path.parents:
        raise ValueError(f"DOCS_DIR の外は指定できません: {source}")
    return path
