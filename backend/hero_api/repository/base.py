from abc import ABC, abstractmethod
from typing import List, Optional

from hero_api.domain import Hero, HeroDefinition


class HeroRepository(ABC):
    """Owns persisted Hero rows. Nothing else writes them."""

    @abstractmethod
    def create(self, definition: HeroDefinition) -> Hero:
        """Store a new hero with the model name exactly as supplied"""
        pass

    @abstractmethod
    def update_model_name(self, hero_id: str, model_name: str) -> Hero:
        """Overwrite model_name and advance updated_at; NotFoundError if missing"""
        pass

    @abstractmethod
    def get(self, hero_id: str) -> Optional[Hero]:
        pass

    @abstractmethod
    def list(self, newest_first: bool = False) -> List[Hero]:
        """By name; newest_first orders by created_at descending instead"""
        pass
