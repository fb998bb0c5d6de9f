from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional
from ..config import settings
from ..database import get_db
from ..dependencies import get_user_id, read_json_object
from ..errors import ApiError
from ..models.transaction import Transaction
from ..schemas import TransactionResponse, TransactionDeleteResponse
from ..services import transaction_store
from ..services.summary import get_summary
from ..validators import (
    check_date_filter,
    check_no_owner_fields,
    parse_id,
    parse_limit,
    parse_offset,
    parse_transaction_create,
    parse_transaction_patch,
    parse_type_filter,
    require,
)

router = APIRouter()


def serialize_transaction(transaction: Transaction) -> dict:
    return TransactionResponse.model_validate(transaction).model_dump(mode="json", by_alias=True)


def transaction_not_found() -> ApiError:
    return ApiError.not_found("NOT_FOUND", "Transaction not found")


def date_window(date_from: Optional[str], date_to: Optional[str]):
    require(check_date_filter(date_from, "dateFrom"))
    require(check_date_filter(date_to, "dateTo"))
    return date_from or None, date_to or None


@router.get("/summary")
async def get_transactions_summary(
    date_from: Optional[str] = Query(None, alias="dateFrom", description="Start of the window (ISO date)"),
    date_to: Optional[str] = Query(None, alias="dateTo", description="End of the window (ISO date)"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """Totals, balance and per-category breakdown for the caller's transactions"""
    date_from, date_to = date_window(date_from, date_to)
    summary = get_summary(db, user_id, date_from=date_from, date_to=date_to)
    return summary.model_dump(mode="json", by_alias=True)


@router.get("")
async def get_transactions(
    record_id: Optional[str] = Query(None, alias="id", description="Fetch a single transaction by ID"),
    type: Optional[str] = Query(None, description="Filter by type: 'income' or 'expense'"),
    category: Optional[str] = Query(None, description="Filter by exact category name"),
    date_from: Optional[str] = Query(None, alias="dateFrom", description="Inclusive lower bound on date"),
    date_to: Optional[str] = Query(None, alias="dateTo", description="Inclusive upper bound on date"),
    limit: Optional[str] = Query(None, description=f"Page size (default {settings.DEFAULT_PAGE_SIZE}, max {settings.MAX_TRANSACTION_PAGE_SIZE})"),
    offset: Optional[str] = Query(None, description="Number of records to skip"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """Get one transaction by ID, or the caller's transactions, newest date first"""
    if record_id:
        transaction = transaction_store.get_owned_transaction(db, user_id, parse_id(record_id))
        if not transaction:
            raise transaction_not_found()
        return serialize_transaction(transaction)

    date_from, date_to = date_window(date_from, date_to)
    transactions = transaction_store.list_transactions(
        db,
        user_id,
        transaction_type=parse_type_filter(type),
        category=category or None,
        date_from=date_from,
        date_to=date_to,
        limit=parse_limit(limit, settings.DEFAULT_PAGE_SIZE, settings.MAX_TRANSACTION_PAGE_SIZE),
        offset=parse_offset(offset)
    )
    return [serialize_transaction(transaction) for transaction in transactions]


@router.post("", status_code=201)
async def create_transaction(
    request: Request,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """Record a new income or expense"""
    data = parse_transaction_create(await read_json_object(request))
    transaction = transaction_store.create_transaction(db, user_id, data)
    return serialize_transaction(transaction)


@router.put("")
async def update_transaction(
    request: Request,
    record_id: Optional[str] = Query(None, alias="id", description="Transaction ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """Update the fields present in the body"""
    transaction_id = parse_id(record_id)
    body = await read_json_object(request)
    require(check_no_owner_fields(body))
    if not transaction_store.get_owned_transaction(db, user_id, transaction_id):
        raise transaction_not_found()

    patch = parse_transaction_patch(body)
    transaction = transaction_store.update_transaction(db, user_id, transaction_id, patch)
    if not transaction:
        raise transaction_not_found()
    return serialize_transaction(transaction)


@router.delete("")
async def delete_transaction(
    record_id: Optional[str] = Query(None, alias="id", description="Transaction ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """Delete a transaction and return it"""
    transaction = transaction_store.delete_transaction(db, user_id, parse_id(record_id))
    if not transaction:
        raise transaction_not_found()
    return TransactionDeleteResponse(
        message="Transaction deleted successfully",
        transaction=TransactionResponse.model_validate(transaction)
    ).model_dump(mode="json", by_alias=True)
