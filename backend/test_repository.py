import threading

import pytest

from hero_api.domain import HeroDefinition
from hero_api.errors import NotFoundError
from hero_api.repository.heroes import InMemoryHeroRepository, SqlHeroRepository

DEFINITION = HeroDefinition(
    name="Einstein",
    description="physicist",
    model_name="llama3.2:latest",
    system_prompt="",
    avatar_url="",
)


@pytest.fixture(params=["sql", "memory"])
def repository(request, db):
    if request.param == "sql":
        return SqlHeroRepository(db)
    return InMemoryHeroRepository()


def test_create_then_read_returns_same_fields(repository):
    hero = repository.create(DEFINITION)
    stored = repository.get(hero.id)

    assert stored.definition() == DEFINITION
    assert stored.id
    assert stored.created_at is not None
    assert stored.updated_at == stored.created_at


def test_update_model_name_advances_updated_at(repository):
    hero = repository.create(DEFINITION)

    updated = repository.update_model_name(hero.id, "hero-" + hero.id)

    assert updated.model_name == "hero-" + hero.id
    assert updated.updated_at > hero.updated_at
    assert updated.created_at == hero.created_at
    assert repository.get(hero.id).model_name == "hero-" + hero.id


def test_update_unknown_id_raises(repository):
    with pytest.raises(NotFoundError):
        repository.update_model_name("missing", "hero-missing")


def test_get_unknown_id_returns_none(repository):
    assert repository.get("missing") is None


def test_list_orders_by_name(repository):
    for name in ("Tesla", "Curie", "Newton"):
        repository.create(HeroDefinition(name=name, description="d", model_name="m"))

    assert [h.name for h in repository.list()] == ["Curie", "Newton", "Tesla"]


def test_ids_are_unique(repository):
    ids = {repository.create(DEFINITION).id for _ in range(20)}
    assert len(ids) == 20


def test_in_memory_repository_counts_writes():
    repository = InMemoryHeroRepository()
    hero = repository.create(DEFINITION)
    repository.update_model_name(hero.id, "x")
    repository.get(hero.id)
    repository.list()

    assert repository.writes == 2


def test_list_newest_first(repository):
    for name in ("Tesla", "Curie", "Newton"):
        repository.create(HeroDefinition(name=name, description="d", model_name="m"))

    heroes = repository.list(newest_first=True)

    assert len(heroes) == 3
    stamps = [h.created_at for h in heroes]
    assert stamps == sorted(stamps, reverse=True)


def test_in_memory_reads_while_creating():
    repository = InMemoryHeroRepository()
    errors = []

    def writer():
        for i in range(200):
            repository.create(HeroDefinition(name=f"hero {i}", description="d", model_name="m"))

    def reader():
        try:
            for _ in range(200):
                repository.list()
                repository.list(newest_first=True)
        except RuntimeError as e:
            errors.append(e)

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(repository.list()) == 200
