"""Repository layer for Firestore data access.

This module exports all repository classes for data persistence.
"""

from lounge_curator.repositories.base import BaseRepository
from lounge_curator.repositories.content_repo import ContentRepository
from lounge_curator.repositories.creator_repo import CreatorRepository
from lounge_curator.repositories.deleted_content_repo import DeletedContentRepository
from lounge_curator.repositories.digest_repo import DigestRepository
from lounge_curator.repositories.lounge_repo import LoungeRepository
from lounge_curator.repositories.membership_repo import MembershipRepository
from lounge_curator.repositories.prompt_adjustment_repo import (
    PromptAdjustmentRepository,
)

__all__ = [
    "BaseRepository",
    "ContentRepository",
    "CreatorRepository",
    "DeletedContentRepository",
    "DigestRepository",
    "LoungeRepository",
    "MembershipRepository",
    "PromptAdjustmentRepository",
]
