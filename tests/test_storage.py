import pytest

from shopify_review_snippets.storage import InMemorySnippetStore, SQLSnippetStore

from conftest import SHOP


@pytest.fixture
def sql_store():
    store = SQLSnippetStore("sqlite://")
    store.create_all()
    return store


@pytest.fixture(params=["memory", "sql"])
def any_store(request, sql_store):
    if request.param == "memory":
        return InMemorySnippetStore()
    return sql_store


def test_upsert_creates_then_overwrites(any_store):
    any_store.upsert(SHOP, "gid://shopify/Product/1", "first")
    any_store.upsert(SHOP, "gid://shopify/Product/1", "second")

    records = any_store.find_many(SHOP, ["gid://shopify/Product/1"])
    assert len(records) == 1
    assert records[0].content == "second"
    assert any_store.find_one(SHOP, "gid://shopify/Product/1").content == "second"


def test_key_is_shop_and_product(any_store):
    any_store.upsert(SHOP, "p1", "mine")
    any_store.upsert("other.myshopify.com", "p1", "theirs")

    assert any_store.find_one(SHOP, "p1").content == "mine"
    assert any_store.find_one("other.myshopify.com", "p1").content == "theirs"


def test_find_many_only_returns_requested_products(any_store):
    for n in range(1, 5):
        any_store.upsert(SHOP, f"p{n}", f"snippet {n}")

    records = any_store.find_many(SHOP, ["p2", "p4", "p9"])
    assert sorted((r.product_id, r.content) for r in records) == [
        ("p2", "snippet 2"),
        ("p4", "snippet 4"),
    ]
    assert any_store.find_many(SHOP, []) == []


def test_find_one_missing(any_store):
    assert any_store.find_one(SHOP, "nope") is None


def test_sql_store_keeps_single_row(sql_store):
    from sqlalchemy import func, select
    from shopify_review_snippets.models.snippet import ReviewSnippet

    for content in ("a", "b", "c"):
        sql_store.upsert(SHOP, "p1", content)

    with sql_store.engine.connect() as conn:
        count = conn.execute(select(func.count()).select_from(ReviewSnippet.__table__)).scalar_one()
    assert count == 1


def test_sql_store_persists_to_file(tmp_path):
    url = f"sqlite:///{tmp_path / 'snippets.db'}"
    store = SQLSnippetStore(url)
    store.create_all()
    store.upsert(SHOP, "p1", "durable")

    reopened = SQLSnippetStore(url)
    assert reopened.find_one(SHOP, "p1").content == "durable"


def test_sql_store_rejects_dialect_without_upsert():
    from sqlalchemy import create_engine

    engine = create_engine("sqlite://")
    engine.dialect.name = "oracle"

    with pytest.raises(ValueError, match="oracle"):
        SQLSnippetStore(engine=engine)


def test_sql_store_close_disposes_engine(sql_store, monkeypatch):
    disposed = []
    monkeypatch.setattr(sql_store.engine, "dispose", lambda: disposed.append(True))

    sql_store.upsert(SHOP, "p1", "kept")
    sql_store.close()

    assert disposed == [True]
