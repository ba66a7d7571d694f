import logging
import threading
import uuid
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hero_api.db import models
from hero_api.db.models import advance, utcnow
from hero_api.domain import Hero, HeroDefinition
from hero_api.errors import NotFoundError, StorageError
from hero_api.repository.base import HeroRepository

logger = logging.getLogger(__name__)


def to_domain(row: models.Hero) -> Hero:
    return Hero(
        id=row.id,
        name=row.name,
        description=row.description,
        model_name=row.model_name,
        system_prompt=row.system_prompt,
        avatar_url=row.avatar_url,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlHeroRepository(HeroRepository):
    def __init__(self, db: Session):
        self.db = db

    def create(self, definition: HeroDefinition) -> Hero:
        now = utcnow()
        row = models.Hero(
            name=definition.name,
            description=definition.description,
            system_prompt=definition.system_prompt,
            model_name=definition.model_name,
            avatar_url=definition.avatar_url,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"could not create hero: {e}") from e

        logger.debug("Created hero %s (%s)", row.id, row.name)
        return to_domain(row)

    def update_model_name(self, hero_id: str, model_name: str) -> Hero:
        try:
            row = self.db.get(models.Hero, hero_id)
            if row is None:
                raise NotFoundError("hero", hero_id)

            row.model_name = model_name
            row.updated_at = advance(row.updated_at)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"could not update hero {hero_id}: {e}") from e

        return to_domain(row)

    def get(self, hero_id: str) -> Optional[Hero]:
        try:
            row = self.db.get(models.Hero, hero_id)
        except SQLAlchemyError as e:
            raise StorageError(f"could not read hero {hero_id}: {e}") from e
        return to_domain(row) if row else None

    def list(self, newest_first: bool = False) -> List[Hero]:
        if newest_first:
            order = (models.Hero.created_at.desc(), models.Hero.name.asc())
        else:
            order = (models.Hero.name.asc(),)
        try:
            rows = self.db.query(models.Hero).order_by(*order).all()
        except SQLAlchemyError as e:
            raise StorageError(f"could not list heroes: {e}") from e
        return [to_domain(r) for r in rows]


class InMemoryHeroRepository(HeroRepository):
    """
    Dict-backed repository.
    Counts writes so callers can check how many times the workflow hit storage.
    """

    def __init__(self, id_factory=None):
        self._heroes: Dict[str, Hero] = {}
        self._lock = threading.Lock()
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self.writes = 0

    def create(self, definition: HeroDefinition) -> Hero:
        with self._lock:
            hero_id = self._id_factory()
            if hero_id in self._heroes:
                raise StorageError(f"duplicate hero id: {hero_id}")

            now = utcnow()
            hero = Hero(
                id=hero_id,
                name=definition.name,
                description=definition.description,
                model_name=definition.model_name,
                system_prompt=definition.system_prompt,
                avatar_url=definition.avatar_url,
                created_at=now,
                updated_at=now,
            )
            self._heroes[hero_id] = hero
            self.writes += 1
            return Hero(**hero.to_dict())

    def update_model_name(self, hero_id: str, model_name: str) -> Hero:
        with self._lock:
            hero = self._heroes.get(hero_id)
            if hero is None:
                raise NotFoundError("hero", hero_id)

            hero.model_name = model_name
            hero.updated_at = advance(hero.updated_at)
            self.writes += 1
            return Hero(**hero.to_dict())

    def get(self, hero_id: str) -> Optional[Hero]:
        with self._lock:
            hero = self._heroes.get(hero_id)
            return Hero(**hero.to_dict()) if hero else None

    def list(self, newest_first: bool = False) -> List[Hero]:
        with self._lock:
            heroes = [Hero(**h.to_dict()) for h in self._heroes.values()]

        heroes.sort(key=lambda h: h.name)
        if newest_first:
            # stable sort keeps name order among equal timestamps
            heroes.sort(key=lambda h: h.created_at, reverse=True)
        return heroes
