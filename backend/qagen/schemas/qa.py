"""
Q&A用スキーマ（生成結果・APIの型）

【初心者向け】
- QAItem: 1問分（question, answer）。JSONLの1行もこの形
- QuestionResponse: LLMが返す {"questions": [...]} の形
- QAGenerateRequest / QAGenerateResponse: /qa/generate の入出力
"""
from pydantic import BaseModel, Field


class QAItem(BaseModel):
    """Q&Aペア"""
    question: str
    answer: str


class QuestionResponse(BaseModel):
    """LLMレスポンス（修復・パース後）"""
    questions: list[QAItem]


class YieldTargetsSchema(BaseModel):
    """目標数（APIレスポンス用）"""
    base_goal: int
    generation_target: int
    min_acceptable: int


class QAGenerateRequest(BaseModel):
    """Q&A生成リクエスト"""
    source: str = Field(..., min_length=1, description="DOCS_DIR からの相対パス（例: guide.md）")


class QAGenerateResponse(BaseModel):
    """Q&A生成レスポンス"""
    source: str
    count: int
    reused: bool = Field(..., description="既存のQ&Aファイルをそのまま返した場合 true")
    targets: YieldTargetsSchema
    items: list[QAItem]


class QAListResponse(BaseModel):
    """保存済みQ&Aの取得レスポンス"""
    source: str
    count: int
    items: list[QAItem]
