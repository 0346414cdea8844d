"""
FastAPIアプリケーションのエントリーポイント（アプリの起動入口）

【初心者向け】
このファイルはQ&A生成バックエンドAPIサーバーを起動する「玄関」です。
- FastAPI: PythonのWebフレームワーク。REST APIを簡単に作れる
- 起動時に /health, /qa のルート（APIの窓口）を登録します

実行方法:
    venv有効化後:
    pip install -e .
    cd backend
    uvicorn qagen.main:app --reload --port 8000
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qagen.core.settings import settings
from qagen.routers import health, qa

# ロガー設定
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Document Q&A Generator API",
    description="Generate question/answer pairs from documents",
    version="0.1.0",
)

# CORS設定: フロントエンドからAPIを呼ぶ際の跨域通信を許可
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ルーター登録: /health=死活確認, /qa=Q&A生成・取得
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(qa.router, prefix="/qa", tags=["qa"])


@app.get("/")
async def root():
    """ルートエンドポイント"""
    return {"message": "Document Q&A Generator API"}
