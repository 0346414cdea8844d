"""
Q&A APIルーター

- POST /qa/generate: ドキュメントのQ&Aを生成（既存ファイルが十分ならそれを返す）
- GET /qa/{source}: 保存済みのQ&Aを返す
"""
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends

from qagen.core.errors import (
    DocumentNotFoundError,
    PersistenceError,
    raise_internal_error,
    raise_invalid_input,
    raise_not_found,
)
from qagen.core.settings import settings
from qagen.docs.loader import resolve_source
from qagen.qa.processor import QAProcessor
from qagen.qa.store import QAStore
from qagen.schemas.qa import (
    QAGenerateRequest,
    QAGenerateResponse,
    QAListResponse,
    YieldTargetsSchema,
)

# ロガー設定
logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_processor() -> QAProcessor:
    """QAProcessorのシングルトン（テストでは dependency_overrides で差し替える）"""
    return QAProcessor()


def _resolve(source: str):
    try:
        return resolve_source(settings.docs_dir, source)
    except ValueError as e:
        raise_invalid_input(str(e))


@router.post("/generate", response_model=QAGenerateResponse)
async def generate_qa(
    request: QAGenerateRequest,
    processor: QAProcessor = Depends(get_processor),
) -> QAGenerateResponse:
    """
    ドキュメントからQ&Aを生成する

    エラーレスポンス形式:
    {
      "error": {
        "code": "NOT_FOUND",
        "message": "..."
      }
    }
    """
    path = _resolve(request.source)

    try:
        result = await processor.process(path)
    except DocumentNotFoundError:
        raise_not_found(f"ドキュメントが見つかりません: {request.source}")
    except PersistenceError as e:
        logger.error(f"Q&A生成に失敗: {request.source} - {e}")
        raise_internal_error(f"ファイルの読み書きに失敗しました: {e.message}")

    return QAGenerateResponse(
        source=request.source,
        count=len(result.items),
        reused=result.reused,
        targets=YieldTargetsSchema(
            base_goal=result.targets.base_goal,
            generation_target=result.targets.generation_target,
            min_acceptable=result.targets.min_acceptable,
        ),
        items=result.items,
    )


@router.get("/{source:path}", response_model=QAListResponse)
async def get_qa(
    source: str,
    processor: QAProcessor = Depends(get_processor),
) -> QAListResponse:
    """保存済みのQ&Aを取得する（なければ NOT_FOUND）"""
    path = _resolve(source)
    store: QAStore = processor.store

    try:
        items = store.load(path)
    except PersistenceError as e:
        raise_internal_error(f"Q&Aファイルの読み込みに失敗しました: {e.message}")

    if items is None:
        raise_not_found(f"保存済みのQ&Aがありません: {source}")

    return QAListResponse(source=source, count=len(items), items=items)
