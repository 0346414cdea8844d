"""
Q&A生成の進捗通知（観測ログ）

【初心者向け】
- 生成ロジック本体は print も logger も直接呼ばず、observer のメソッドを呼ぶだけ
- デフォルトの LoggingObserver がログ行に変換する
- テストでは自前の observer を渡せば、ログを捕まえなくても進捗を検証できる
"""
import logging
from typing import Protocol

# ロガー設定
logger = logging.getLogger(__name__)


class GenerationObserver(Protocol):
    """生成の進捗を受け取るインターフェース"""

    def targets_computed(self, word_count: int, targets) -> None: ...

    def request_started(self, count: int) -> None: ...

    def attempt_failed(
        self,
        attempt: int,
        max_attempts: int,
        error: Exception,
        raw: str | None = None,
        repaired: str | None = None,
    ) -> None: ...

    def attempt_succeeded(self, received: int, requested: int) -> None: ...

    def level_started(self, level: str, chunk_count: int) -> None: ...

    def subchunk_finished(
        self,
        level: str,
        index: int,
        total: int,
        target: int,
        share: float,
        received: int | None,
        error: Exception | None = None,
    ) -> None: ...

    def level_finished(self, level: str, received: int, target: int) -> None: ...

    def coverage_exhausted(self, received: int, target: int) -> None: ...

    def section_started(self, index: int, total: int, word_count: int, target: int) -> None: ...

    def existing_checked(self, path: str, count: int, min_acceptable: int, reused: bool) -> None: ...

    def saved(self, path: str, count: int) -> None: ...


class LoggingObserver:
    """進捗をloggingに出力する observer（デフォルト）"""

    def targets_computed(self, word_count: int, targets) -> None:
        logger.info(
            f"[QA:TARGETS] words={word_count}, base_goal={targets.base_goal}, "
            f"generation_target={targets.generation_target} (+{targets.extra}), "
            f"min_acceptable={targets.min_acceptable}"
        )

    def request_started(self, count: int) -> None:
        logger.info(f"[QA:REQUEST] {count}問をリクエスト")

    def attempt_failed(self, attempt, max_attempts, error, raw=None, repaired=None) -> None:
        logger.warning(
            f"[QA:ATTEMPT_FAILED] attempt={attempt}/{max_attempts}, "
            f"error={type(error).__name__}: {error}"
        )
        if raw is not None:
            logger.warning(f"[QA:ATTEMPT_FAILED] raw={raw}")
        if repaired is not None:
            logger.warning(f"[QA:ATTEMPT_FAILED] repaired={repaired}")

    def attempt_succeeded(self, received: int, requested: int) -> None:
        logger.info(f"[QA:ATTEMPT_OK] {received}問を取得（要求 {requested}問）")

    def level_started(self, level: str, chunk_count: int) -> None:
        logger.info(f"[QA:LEVEL] {level} で分割: {chunk_count}チャンク")

    def subchunk_finished(self, level, index, total, target, share, received, error=None) -> None:
        if error is not None:
            logger.warning(
                f"[QA:SUBCHUNK] {level} {index + 1}/{total} 失敗（スキップ）: "
                f"{type(error).__name__}: {error}"
            )
            return
        logger.info(
            f"[QA:SUBCHUNK] {level} {index + 1}/{total}: target={target} "
            f"({share * 100:.1f}% of content), received={received}"
        )

    def level_finished(self, level: str, received: int, target: int) -> None:
        logger.info(f"[QA:LEVEL_DONE] {level}: {received}問（目標 {target}問）")

    def coverage_exhausted(self, received: int, target: int) -> None:
        logger.warning(f"[QA:EXHAUSTED] 目標に届きませんでした: {received}/{target}問")

    def section_started(self, index: int, total: int, word_count: int, target: int) -> None:
        logger.info(
            f"[QA:SECTION] {index + 1}/{total} ({word_count} words, target {target})"
        )

    def existing_checked(self, path: str, count: int, min_acceptable: int, reused: bool) -> None:
        if reused:
            logger.info(
                f"[QA:EXISTING] {path}: {count}問（最低 {min_acceptable}問）を満たすため再利用"
            )
        else:
            logger.info(
                f"[QA:EXISTING] {path}: {count}問（最低 {min_acceptable}問）に満たないため再生成"
            )

    def saved(self, path: str, count: int) -> None:
        logger.info(f"[QA:SAVED] {count}問を保存: {path}")
