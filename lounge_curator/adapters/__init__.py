"""External service adapters."""

from lounge_curator.adapters.firestore_client import FirestoreClient
from lounge_curator.adapters.gemini_client import GeminiClient, OracleResponseError

__all__ = [
    "FirestoreClient",
    "GeminiClient",
    "OracleResponseError",
]
