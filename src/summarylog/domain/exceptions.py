"""Domain exceptions."""


class SummaryLogError(Exception):
    """Base exception for summary log errors."""


class ConversationNotFoundError(SummaryLogError):
    """会話メタデータが見つからない場合に発生する例外

    The digest cannot be labelled without channel information, so it is left
    unprocessed and upstream redelivery decides what happens next.
    """

    def __init__(self, conversation_id: str, message: str = "") -> None:
        """初期化

        Args:
            conversation_id: 見つからなかった会話のID
            message: エラーメッセージ（オプション）
        """
        self.conversation_id = conversation_id
        super().__init__(message or f"Conversation {conversation_id} not found")


class MalformedDocumentError(SummaryLogError):
    """Stored summary text could not be parsed."""
