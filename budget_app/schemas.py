"""
Pydantic schemas for request payloads and responses.

Payloads are checked field by field in `validators` (so each failure keeps its
own error code) and then carried to the stores in these models. Responses use
camelCase keys.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from .timestamps import to_iso


# =============================================================================
# Category Schemas
# =============================================================================

class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    name: str = Field(..., min_length=1)
    type: str = Field(..., pattern=r"^(income|expense)$")
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$", description="Hex color code")
    icon: Optional[str] = Field(None, description="Icon identifier")


class CategoryResponse(BaseModel):
    """Schema for category response"""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: str
    name: str
    type: str
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return to_iso(value)


class CategoryDeleteResponse(BaseModel):
    """Response for category deletion, carrying the removed record"""
    message: str
    category: CategoryResponse


# =============================================================================
# Transaction Schemas
# =============================================================================

class TransactionCreate(BaseModel):
    """Schema for creating a transaction"""
    type: str = Field(..., pattern=r"^(income|expense)$")
    amount: float = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    date: str = Field(..., min_length=1, description="ISO date or timestamp")


class TransactionPatch(BaseModel):
    """Partial update of a transaction.

    Only keys present in the request body are set on the model, so
    `model_fields_set` tells "not sent" apart from "sent as null".
    """
    type: Optional[str] = Field(None, pattern=r"^(income|expense)$")
    amount: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    date: Optional[str] = Field(None, min_length=1)

    def changes(self) -> dict:
        """Fields that were sent, with their values"""
        return self.model_dump(exclude_unset=True)


class TransactionResponse(BaseModel):
    """Schema for transaction response"""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: str
    type: str
    amount: float
    category: str
    description: Optional[str] = None
    date: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_timestamps(self, value: datetime) -> str:
        return to_iso(value)


class TransactionDeleteResponse(BaseModel):
    """Response for transaction deletion, carrying the removed record"""
    message: str
    transaction: TransactionResponse


# =============================================================================
# Summary Schemas
# =============================================================================

class CategoryBreakdownItem(BaseModel):
    category: str
    type: str
    total: float
    count: int


class SummaryResponse(BaseModel):
    """Aggregate totals over a date window"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_income: float
    total_expenses: float
    balance: float
    transaction_count: int
    category_breakdown: List[CategoryBreakdownItem] = Field(default_factory=list)


# =============================================================================
# Common Response Schemas
# =============================================================================

class ErrorResponse(BaseModel):
    """Error body returned for every handled failure"""
    error: str
    code: Optional[str] = None
