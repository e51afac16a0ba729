"""Storage backends for review snippets."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .models.snippet import Base, ReviewSnippet


class BaseSnippetStore(ABC):
    """Abstract snippet store keyed by (shop, product_id)."""

    @abstractmethod
    def find_many(self, shop: str, product_ids: Iterable[str]) -> List[ReviewSnippet]:
        """Get all snippets of a shop for the given products in one lookup."""

    @abstractmethod
    def find_one(self, shop: str, product_id: str) -> Optional[ReviewSnippet]:
        """Get the snippet for a single product."""

    @abstractmethod
    def upsert(self, shop: str, product_id: str, content: str) -> None:
        """Create the snippet or overwrite its content."""


class InMemorySnippetStore(BaseSnippetStore):
    """In-memory storage for development/testing."""

    def __init__(self):
        self._store: dict[tuple[str, str], ReviewSnippet] = {}

    def find_many(self, shop: str, product_ids: Iterable[str]) -> List[ReviewSnippet]:
        return [
            self._store[(shop, product_id)]
            for product_id in dict.fromkeys(product_ids)
            if (shop, product_id) in self._store
        ]

    def find_one(self, shop: str, product_id: str) -> Optional[ReviewSnippet]:
        return self._store.get((shop, product_id))

    def upsert(self, shop: str, product_id: str, content: str) -> None:
        existing = self._store.get((shop, product_id))
        if existing is not None:
            existing.content = content
            return
        self._store[(shop, product_id)] = ReviewSnippet(
            shop=shop, product_id=product_id, content=content
        )

    def __len__(self) -> int:
        return len(self._store)


class SQLSnippetStore(BaseSnippetStore):
    """SQLAlchemy-backed storage for persistence across restarts."""

    UPSERT_DIALECTS = ("sqlite", "postgresql", "mysql", "mariadb")

    def __init__(
        self,
        database_url: str = "sqlite:///review_snippets.db",
        echo: bool = False,
        engine: Optional[Engine] = None,
    ):
        self.engine = engine or self._create_engine(database_url, echo)
        if self.engine.dialect.name not in self.UPSERT_DIALECTS:
            raise ValueError(
                f"Database dialect '{self.engine.dialect.name}' has no single-statement upsert; "
                f"use one of {', '.join(self.UPSERT_DIALECTS)}"
            )
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    @staticmethod
    def _create_engine(database_url: str, echo: bool) -> Engine:
        kwargs: dict = {"echo": echo}
        if database_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory databases live as long as their single connection
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()

    def create_all(self) -> None:
        """Create the snippet table if it does not exist."""
        Base.metadata.create_all(self.engine)

    def find_many(self, shop: str, product_ids: Iterable[str]) -> List[ReviewSnippet]:
        product_ids = list(product_ids)
        if not product_ids:
            return []
        query = select(ReviewSnippet).where(
            ReviewSnippet.shop == shop,
            ReviewSnippet.product_id.in_(product_ids),
        )
        with self._session_factory() as session:
            return list(session.scalars(query).all())

    def find_one(self, shop: str, product_id: str) -> Optional[ReviewSnippet]:
        query = select(ReviewSnippet).where(
            ReviewSnippet.shop == shop,
            ReviewSnippet.product_id == product_id,
        )
        with self._session_factory() as session:
            return session.scalars(query).first()

    def upsert(self, shop: str, product_id: str, content: str) -> None:
        statement = self._upsert_statement(
            {"shop": shop, "productId": product_id, "content": content}
        )
        with self._session_factory.begin() as session:
            session.execute(statement)

    def _upsert_statement(self, values: dict):
        table = ReviewSnippet.__table__
        dialect = self.engine.dialect.name

        if dialect in ("sqlite", "postgresql"):
            insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
            statement = insert(table).values(values)
            return statement.on_conflict_do_update(
                index_elements=["shop", "productId"],
                set_={"content": statement.excluded.content},
            )
        if dialect in ("mysql", "mariadb"):
            statement = mysql.insert(table).values(values)
            return statement.on_duplicate_key_update(content=statement.inserted.content)

        raise ValueError(f"Upsert is not supported for dialect '{dialect}'")
