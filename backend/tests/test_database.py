from sqlalchemy import text

from database import engine, get_db


class TestApplicationEngine:
    def test_like_is_case_sensitive(self):
        with engine.connect() as conn:
            assert conn.execute(text("SELECT 'Alice Foo' LIKE '%foo%'")).scalar() == 0
            assert conn.execute(text("SELECT 'Alice Foo' LIKE '%Foo%'")).scalar() == 1

    def test_foreign_keys_are_enforced(self):
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_get_db_closes_session(self):
        gen = get_db()
        db = next(gen)
        assert db.bind is engine
        gen.close()
