"""
Category store.

Every read and write is scoped to the owner passed in by the caller. A category
owned by someone else is treated exactly like a missing one.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.category import Category
from ..schemas import CategoryCreate
from ..timestamps import utc_now

logger = logging.getLogger(__name__)


def get_owned_category(db: Session, user_id: str, category_id: int) -> Optional[Category]:
    """Authorized lookup: the category if it exists and belongs to user_id"""
    return db.query(Category).filter(
        Category.id == category_id,
        Category.user_id == user_id
    ).first()


def list_categories(
    db: Session,
    user_id: str,
    category_type: Optional[str] = None,
    limit: int = 100,
    offset: int = 0
) -> List[Category]:
    query = db.query(Category).filter(Category.user_id == user_id)

    if category_type:
        query = query.filter(Category.type == category_type)

    return query.order_by(Category.name.asc(), Category.id.asc()).offset(offset).limit(limit).all()


def create_category(db: Session, user_id: str, data: CategoryCreate) -> Category:
    category = Category(
        user_id=user_id,
        name=data.name,
        type=data.type,
        color=data.color,
        icon=data.icon,
        created_at=utc_now()
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Created category %s (%s) for %s", category.id, category.name, user_id)
    return category


def delete_category(db: Session, user_id: str, category_id: int) -> Optional[Category]:
    """Delete an owned category, returning it, or None when there is none to delete.

    Transactions that use the category name are left untouched.
    """
    category = get_owned_category(db, user_id, category_id)
    if not category:
        return None

    db.delete(category)
    db.commit()
    logger.info("Deleted category %s for %s", category_id, user_id)
    return category
