import pytest
from catalog_api.uow import SQLAlchemyUnitOfWork as RWuow

from tests.factories.catalog import CategoryFactory


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_success(self, session):
        with RWuow() as uow:
            category, created = uow.categories.get_or_create("Livros")
            category_id = category.id

        assert created is True
        session.expire_all()
        assert RWuow().categories.exists_by_id(category_id)

    def test_rolls_back_on_error(self, session):
        with pytest.raises(ValueError), RWuow() as uow:
            uow.categories.get_or_create("Temporária")
            raise ValueError("boom")

        assert RWuow().categories.find_one(name="Temporária") is None

    def test_repositories_share_session(self, session):
        uow = RWuow()
        assert uow.users.session is uow.products.session is uow.categories.session

    def test_rollback_discards_pending(self, session):
        CategoryFactory(name="Persistida")
        uow = RWuow()
        uow.categories.get_or_create("Pendente")
        uow.rollback()

        names = {c.name for c in uow.categories.list()}
        assert names == {"Persistida"}
