"""
Pydantic Schemas for Request/Response Validation

Covers:
- Account flows (sign-up, sign-in, password reset)
- Transactional email routes
- Order drafts and menu browsing
- Staff shift editing
"""

from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Optional, List, Union
from datetime import datetime

from dashboard.ordering.models import DraftSnapshot, MenuItem, OrderLineItem, OrderSubmission
from dashboard.staff import StaffMember

SHIFT_TIME_PATTERN = r"^(?:(?:[01]\d|2[0-3]):[0-5]\d|24:00)$"


# =============================================================================
# AUTH SCHEMAS
# =============================================================================

class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    full_name: Optional[str] = Field(None, max_length=100)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    redirect_to: Optional[str] = None


class SetNewPasswordRequest(BaseModel):
    new_password: str
    confirm_password: str

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info) -> str:
        if "new_password" in info.data and v != info.data["new_password"]:
            raise ValueError("Passwords do not match")
        return v


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# =============================================================================
# EMAIL SCHEMAS
# =============================================================================

class SendPasswordResetRequest(BaseModel):
    """Email a caller-supplied password reset link."""
    email: EmailStr
    reset_link: str
    customer_name: Optional[str] = None

    @field_validator("reset_link")
    @classmethod
    def require_link(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Reset link is required")
        return v


class SendSignupLinkRequest(BaseModel):
    """Generate a signup confirmation link and email it."""
    email: EmailStr
    redirect_to: Optional[str] = None
    customer_name: Optional[str] = None


class SendTestEmailRequest(BaseModel):
    to: Union[EmailStr, List[EmailStr]]
    subject: str
    html: str

    @field_validator("subject", "html")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class EmailResponse(BaseModel):
    """Response after sending an email."""
    success: bool
    message: Optional[str] = None
    message_id: Optional[str] = None


# =============================================================================
# MENU SCHEMAS
# =============================================================================

class MenuItemResponse(BaseModel):
    id: str
    name: str
    description: str
    category: str
    price: float
    available: bool
    preparation_time: int

    @classmethod
    def from_item(cls, item: MenuItem) -> "MenuItemResponse":
        return cls(**item.to_dict())


class MenuListResponse(BaseModel):
    search: str
    category: str
    categories: List[str]
    items: List[MenuItemResponse]


# =============================================================================
# DRAFT SCHEMAS
# =============================================================================

class OrderLineItemSchema(BaseModel):
    menu_item_id: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    special_instructions: str = ""

    def to_line_item(self) -> OrderLineItem:
        return OrderLineItem(**self.model_dump())


class DraftCreate(BaseModel):
    """Optional initial values for a new draft."""
    initial_table: str = ""
    initial_waiter: str = ""
    initial_note: str = ""
    initial_items: List[OrderLineItemSchema] = Field(default_factory=list)


class DraftUpdate(BaseModel):
    """Fields left unset are not changed."""
    selected_table: Optional[str] = None
    selected_waiter: Optional[str] = None
    special_note: Optional[str] = None


class AddItemRequest(BaseModel):
    menu_item_id: str = Field(..., min_length=1)


class DraftResponse(BaseModel):
    draft_id: str
    selected_table: str
    selected_waiter: str
    order_items: List[OrderLineItemSchema]
    special_note: str
    total_amount: float
    is_valid: bool

    @classmethod
    def from_snapshot(cls, draft_id: str, snapshot: DraftSnapshot) -> "DraftResponse":
        return cls(draft_id=draft_id, **snapshot.to_dict())


class ItemQuantityResponse(BaseModel):
    menu_item_id: str
    quantity: int


class SubmitDraftRequest(BaseModel):
    """Optional customer contact for an order confirmation email."""
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None


class SubmitDraftResponse(BaseModel):
    success: bool
    message: str
    order_id: str
    table: str
    waiter: str
    total_amount: float
    status: str
    created_at: datetime
    estimated_ready_time: datetime
    confirmation_sent: bool = False

    @classmethod
    def from_submission(cls, submission: OrderSubmission, confirmation_sent: bool) -> "SubmitDraftResponse":
        return cls(
            success=True,
            message="Order placed successfully!",
            order_id=submission.order_id,
            table=submission.draft.selected_table,
            waiter=submission.draft.selected_waiter,
            total_amount=submission.draft.total_amount,
            status=submission.status,
            created_at=submission.created_at,
            estimated_ready_time=submission.estimated_ready_time,
            confirmation_sent=confirmation_sent,
        )


# =============================================================================
# STAFF SCHEMAS
# =============================================================================

class StaffResponse(BaseModel):
    id: str
    name: str
    role: str
    shift_start: str
    shift_end: str

    @classmethod
    def from_member(cls, member: StaffMember) -> "StaffResponse":
        return cls(**member.to_dict())


class ShiftUpdate(BaseModel):
    shift_start: str = Field(..., pattern=SHIFT_TIME_PATTERN, examples=["11:00"])
    shift_end: str = Field(..., pattern=SHIFT_TIME_PATTERN, examples=["19:00"])


# =============================================================================
# GENERIC
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    notification_service: str
    identity_provider: str
    open_drafts: int
    timestamp: datetime
