"""
Transaction store.

All operations take the owner id explicitly; lookups of rows owned by another
user come back empty, the same as rows that do not exist.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.transaction import Transaction
from ..schemas import TransactionCreate, TransactionPatch
from ..timestamps import next_update_stamp, utc_now

logger = logging.getLogger(__name__)


def get_owned_transaction(db: Session, user_id: str, transaction_id: int) -> Optional[Transaction]:
    """Authorized lookup: the transaction if it exists and belongs to user_id"""
    return db.query(Transaction).filter(
        Transaction.id == transaction_id,
        Transaction.user_id == user_id
    ).first()


def filter_transactions(
    db: Session,
    user_id: str,
    transaction_type: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None
):
    """Owner-scoped query with the optional filters applied.

    The date bounds are inclusive and compared as strings, which orders ISO
    dates correctly.
    """
    query = db.query(Transaction).filter(Transaction.user_id == user_id)

    if transaction_type:
        query = query.filter(Transaction.type == transaction_type)

    if category:
        query = query.filter(Transaction.category == category)

    if date_from:
        query = query.filter(Transaction.date >= date_from)

    if date_to:
        query = query.filter(Transaction.date <= date_to)

    return query


def list_transactions(
    db: Session,
    user_id: str,
    transaction_type: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    limit: int = 100,
    offset: int = 0
) -> List[Transaction]:
    query = filter_transactions(db, user_id, transaction_type, category, date_from, date_to)

    # Order by date descending
    query = query.order_by(Transaction.date.desc(), Transaction.id.desc())

    return query.offset(offset).limit(limit).all()


def create_transaction(db: Session, user_id: str, data: TransactionCreate) -> Transaction:
    now = utc_now()
    transaction = Transaction(
        user_id=user_id,
        type=data.type,
        amount=data.amount,
        category=data.category,
        description=data.description,
        date=data.date,
        created_at=now,
        updated_at=now
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info("Created %s transaction %s for %s", transaction.type, transaction.id, user_id)
    return transaction


def update_transaction(
    db: Session,
    user_id: str,
    transaction_id: int,
    patch: TransactionPatch
) -> Optional[Transaction]:
    """Apply the fields present in `patch`; updated_at is refreshed even when none are"""
    transaction = get_owned_transaction(db, user_id, transaction_id)
    if not transaction:
        return None

    # Update only provided fields
    for field, value in patch.changes().items():
        setattr(transaction, field, value)

    transaction.updated_at = next_update_stamp(transaction.updated_at)

    db.commit()
    db.refresh(transaction)
    return transaction


def delete_transaction(db: Session, user_id: str, transaction_id: int) -> Optional[Transaction]:
    """Delete an owned transaction and return it, or None when there is none"""
    transaction = get_owned_transaction(db, user_id, transaction_id)
    if not transaction:
        return None

    db.delete(transaction)
    db.commit()
    logger.info("Deleted transaction %s for %s", transaction_id, user_id)
    return transaction
