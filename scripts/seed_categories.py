#!/usr/bin/env python3
"""
Seed the default income and expense categories for an owner.

Names the owner already has are skipped, so the script can be re-run.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from budget_app.config import settings
from budget_app.database import SessionLocal, create_tables
from budget_app.models import Category
from budget_app.timestamps import utc_now

DEFAULT_CATEGORIES = [
    {"name": "Salary", "type": "income", "color": "#10B981", "icon": "💼"},
    {"name": "Freelance", "type": "income", "color": "#8B5CF6", "icon": "💻"},
    {"name": "Investments", "type": "income", "color": "#F59E0B", "icon": "📈"},
    {"name": "Business", "type": "income", "color": "#3B82F6", "icon": "🏢"},
    {"name": "Other Income", "type": "income", "color": "#14B8A6", "icon": "💰"},
    {"name": "Food & Dining", "type": "expense", "color": "#EF4444", "icon": "🍔"},
    {"name": "Transportation", "type": "expense", "color": "#F97316", "icon": "🚗"},
    {"name": "Shopping", "type": "expense", "color": "#EC4899", "icon": "🛍️"},
    {"name": "Entertainment", "type": "expense", "color": "#A855F7", "icon": "🎬"},
    {"name": "Bills & Utilities", "type": "expense", "color": "#6366F1", "icon": "💡"},
    {"name": "Healthcare", "type": "expense", "color": "#06B6D4", "icon": "🏥"},
    {"name": "Education", "type": "expense", "color": "#8B5CF6", "icon": "📚"},
    {"name": "Travel", "type": "expense", "color": "#0EA5E9", "icon": "✈️"},
    {"name": "Other Expenses", "type": "expense", "color": "#64748B", "icon": "📦"},
]


def seed_categories(db, user_id):
    """Insert the default categories missing for user_id, returning how many were added"""
    existing = {
        name for (name,) in db.query(Category.name).filter(Category.user_id == user_id)
    }

    created = 0
    now = utc_now()
    for cat_data in DEFAULT_CATEGORIES:
        if cat_data["name"] in existing:
            continue
        db.add(Category(user_id=user_id, created_at=now, **cat_data))
        created += 1

    db.commit()
    return created


def main():
    parser = argparse.ArgumentParser(description="Seed default budget categories")
    parser.add_argument("--user", default=settings.DEFAULT_USER_ID, help="Owner id to seed categories for")
    args = parser.parse_args()

    create_tables()

    db = SessionLocal()
    try:
        created = seed_categories(db, args.user)
        print(f"✅ Added {created} categories for {args.user}")
    except Exception as e:
        db.rollback()
        print(f"❌ Seeding failed: {e}")
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
