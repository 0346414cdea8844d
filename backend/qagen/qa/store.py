"""
Q&Aストア（JSONLファイルベース永続化）

- 保存先: ドキュメントと同じディレクトリの <stem><suffix>.jsonl（例: guide.md → guide_qa.jsonl）
- 1行1件の {"question": ..., "answer": ...}
- 旧形式（<stem><suffix>.json のJSON配列）も読める。条件を満たせばJSONLに変換する
- 保存は一時ファイルに書いてから置き換える（途中で落ちても壊れたファイルを残さない）
"""
import logging
import os
import tempfile
from pathlib import Path

from qagen.core.errors import PersistenceError, SchemaParseError
from qagen.core.settings import settings
from qagen.qa.observer import GenerationObserver, LoggingObserver
from qagen.qa.parser import load_qa_array, load_qa_lines
from qagen.schemas.qa import QAItem

# ロガー設定
logger = logging.getLogger(__name__)


class QAStore:
    """ドキュメントごとのQ&Aファイルを読み書きする"""

    def __init__(self, suffix: str | None = None, observer: GenerationObserver | None = None):
        self.suffix = suffix if suffix is not None else settings.qa_file_suffix
        self.observer = observer or LoggingObserver()

    def qa_path(self, doc_path: str | Path, extension: str = "jsonl") -> Path:
        """ドキュメントのパスからQ&Aファイルのパスを決める"""
        doc_path = Path(doc_path)
        stem = doc_path.stem or "unknown"
        return doc_path.parent / f"{stem}{self.suffix}.{extension}"

    def _read_text(self, path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(path, f"読み込みに失敗しました: {e}") from e

    def load(self, doc_path: str | Path) -> list[QAItem] | None:
        """
        保存済みのQ&Aを読む（JSONL優先、なければ旧形式）

        Returns:
            QAItemのリスト、またはNone（ファイルがない・読める行がない場合）
        """
        jsonl_path = self.qa_path(doc_path, "jsonl")
        if jsonl_path.exists():
            items = load_qa_lines(self._read_text(jsonl_path))
            if not items:
                logger.info(f"JSONLに有効な行がありません: {jsonl_path}")
                return None
            return items

        json_path = self.qa_path(doc_path, "json")
        if json_path.exists():
            try:
                return load_qa_array(self._read_text(json_path))
            except SchemaParseError as e:
                logger.warning(f"旧形式のQ&Aファイルを読めません: {json_path} - {e}")
                return None

        return None

    def load_if_sufficient(self, doc_path: str | Path, min_acceptable: int) -> list[QAItem] | None:
        """
        保存済みのQ&Aが min_acceptable 件以上あれば返す（なければ None）

        旧形式（JSON配列）で条件を満たす場合は、JSONLに変換してから返す。
        JSONLがあるときは旧形式は見ない。
        """
        jsonl_path = self.qa_path(doc_path, "jsonl")
        json_path = self.qa_path(doc_path, "json")
        is_legacy = not jsonl_path.exists() and json_path.exists()

        items = self.load(doc_path)
        if items is None:
            logger.info(f"既存のQ&Aファイルがありません: {doc_path}")
            return None

        source_path = json_path if is_legacy else jsonl_path
        reused = len(items) >= min_acceptable
        self.observer.existing_checked(str(source_path), len(items), min_acceptable, reused)
        if not reused:
            return None

        if is_legacy:
            logger.info(f"旧形式をJSONLに変換: {json_path} -> {jsonl_path}")
            self.write_lines(jsonl_path, items)
        return items

    def write_lines(self, path: Path, items: list[QAItem]) -> None:
        """JSONLを書き出す（一時ファイル → os.replace）"""
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                for item in items:
                    f.write(item.model_dump_json())
                    f.write("\n")
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Q&Aファイルの保存に失敗: {path} - {type(e).__name__}: {e}")
            raise PersistenceError(path, f"書き込みに失敗しました: {e}") from e

    def save(self, doc_path: str | Path, items: list[QAItem]) -> Path | None:
        """
        ドキュメントのQ&AをJSONLとして保存する（0件なら何もしない）

        Returns:
            保存先パス、または None（0件の場合）

        Raises:
            PersistenceError: 書き込みに失敗した場合
        """
        if not items:
            logger.warning(f"Q&Aが0件のため保存しません: {doc_path}")
            return None

        path = self.qa_path(doc_path, "jsonl")
        self.write_lines(path, items)
        self.observer.saved(str(path), len(items))
        return path
