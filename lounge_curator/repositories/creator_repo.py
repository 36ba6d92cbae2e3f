"""Repository for Creator entities."""

from lounge_curator.models.lounge import Creator
from lounge_curator.repositories.base import BaseRepository


class CreatorRepository(BaseRepository[Creator]):
    """Creator 엔티티 Repository.

    Firestore Collection: creators
    """

    collection_name = "creators"
    model_class = Creator
