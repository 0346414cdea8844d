"""
死活確認APIルーター

- GET /health: サーバーが起動していれば ok と、Q&A生成に使うモデル名・保存先の接尾辞を返す
- Ollama 自体には問い合わせない（生成時のエラーは /qa 側で返す）
"""
from fastapi import APIRouter

from qagen.core.settings import settings

router = APIRouter()


@router.get("")
async def health_check():
    return {
        "status": "ok",
        "model": settings.ollama_model,
        "qa_file_suffix": settings.qa_file_suffix,
    }
