"""
Tests for the default category seeding script.
"""
from budget_app.models import Category
from scripts.seed_categories import DEFAULT_CATEGORIES, seed_categories


class TestSeedCategories:

    def test_seeds_defaults(self, db):
        assert seed_categories(db, "user-1") == len(DEFAULT_CATEGORIES)
        types = [category.type for category in db.query(Category).filter(Category.user_id == "user-1")]
        assert types.count("income") == 5
        assert types.count("expense") == 9

    def test_rerun_skips_existing(self, db):
        seed_categories(db, "user-1")
        assert seed_categories(db, "user-1") == 0
        assert seed_categories(db, "user-2") == len(DEFAULT_CATEGORIES)

    def test_seeded_categories_visible_through_api(self, db, client):
        seed_categories(db, "user-1")
        names = [category["name"] for category in client.get("/api/categories", params={"type": "income"}).json()]
        assert names == sorted(names)
        assert "Salary" in names
