"""
共通エラー定義（Q&A生成のドメイン例外 + APIで返すエラー形式の統一）

【初心者向け】
- QAError 系: 生成・永続化の途中で発生する例外。チャンク単位の失敗は
  呼び出し側で握って続行し、ドキュメント単位の失敗（PersistenceError）だけが致命的
- AppError: フロントエンドが { "error": { "code": "...", "message": "..." } } で
  エラーを受け取れるよう、共通形式で例外を投げる
"""
from fastapi import HTTPException, status
from typing import Literal


class QAError(Exception):
    """Q&A生成関連の基底例外"""
    pass


class SchemaParseError(QAError):
    """修復後のペイロードが {"questions": [...]} の形にならなかった"""
    pass


class GenerationFailure(QAError):
    """再試行を使い切ってもチャンクからQ&Aが得られなかった"""

    def __init__(self, reason: str, attempts: int):
        super().__init__(f"{reason} (attempts={attempts})")
        self.reason = reason
        self.attempts = attempts


class PersistenceError(QAError):
    """ドキュメントまたはQ&Aファイルの読み書き失敗（そのドキュメントの処理は中断）"""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class DocumentNotFoundError(PersistenceError):
    """ドキュメントが存在しない"""
    pass


# エラーコード一覧（型安全のため Literal で定義）
ErrorCode = Literal[
    "INVALID_INPUT",
    "NOT_FOUND",
    "INTERNAL_ERROR",
]

# エラーコードとHTTPステータスのマッピング
ERROR_STATUS_MAP: dict[ErrorCode, int] = {
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(HTTPException):
    """アプリケーション共通エラー

    FastAPIのHTTPExceptionはdetailをJSONとして返す。
    期待される形式: { "error": { "code": "...", "message": "..." } }
    """

    def __init__(self, code: ErrorCode, message: str):
        status_code = ERROR_STATUS_MAP[code]
        super().__init__(
            status_code=status_code,
            detail={"error": {"code": code, "message": message}}
        )


def raise_invalid_input(message: str) -> None:
    """INVALID_INPUTエラーを発生させる"""
    raise AppError("INVALID_INPUT", message)


def raise_not_found(message: str) -> None:
    """NOT_FOUNDエラーを発生させる"""
    raise AppError("NOT_FOUND", message)


def raise_internal_error(message: str) -> None:
    """INTERNAL_ERRORエラーを発生させる"""
    raise AppError("INTERNAL_ERROR", message)
