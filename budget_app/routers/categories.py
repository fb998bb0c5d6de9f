from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional
from ..config import settings
from ..database import get_db
from ..dependencies import get_user_id, read_json_object
from ..errors import ApiError
from ..models.category import Category
from ..schemas import CategoryResponse, CategoryDeleteResponse
from ..services import category_store
from ..validators import parse_category_create, parse_id, parse_limit, parse_offset, parse_type_filter

router = APIRouter()


def serialize_category(category: Category) -> dict:
    return CategoryResponse.model_validate(category).model_dump(mode="json", by_alias=True)


def category_not_found() -> ApiError:
    return ApiError.not_found("CATEGORY_NOT_FOUND", "Category not found")


@router.get("")
async def get_categories(
    record_id: Optional[str] = Query(None, alias="id", description="Fetch a single category by ID"),
    type: Optional[str] = Query(None, description="Filter by type: 'income' or 'expense'"),
    limit: Optional[str] = Query(None, description=f"Page size (default {settings.DEFAULT_PAGE_SIZE}, max {settings.MAX_CATEGORY_PAGE_SIZE})"),
    offset: Optional[str] = Query(None, description="Number of records to skip"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """Get one category by ID, or the caller's categories ordered by name"""
    if record_id:
        category = category_store.get_owned_category(db, user_id, parse_id(record_id))
        if not category:
            raise category_not_found()
        return serialize_category(category)

    categories = category_store.list_categories(
        db,
        user_id,
        category_type=parse_type_filter(type),
        limit=parse_limit(limit, settings.DEFAULT_PAGE_SIZE, settings.MAX_CATEGORY_PAGE_SIZE),
        offset=parse_offset(offset)
    )
    return [serialize_category(category) for category in categories]


@router.post("", status_code=201)
async def create_category(
    request: Request,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """Create a new category"""
    data = parse_category_create(await read_json_object(request))
    category = category_store.create_category(db, user_id, data)
    return serialize_category(category)


@router.delete("")
async def delete_category(
    record_id: Optional[str] = Query(None, alias="id", description="Category ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id)
):
    """Delete a category and return it"""
    category = category_store.delete_category(db, user_id, parse_id(record_id))
    if not category:
        raise category_not_found()
    return CategoryDeleteResponse(
        message="Category deleted successfully",
        category=CategoryResponse.model_validate(category)
    ).model_dump(mode="json", by_alias=True)
