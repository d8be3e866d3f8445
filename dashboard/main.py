"""
FastAPI Application Entry Point

Restaurant Dashboard - Hybrid Architecture
Supports both Mock services (development) and real providers (production).

Endpoints:
    - /api/auth/*: Sign-up, sign-in, sign-out, password reset
    - /api/send-*: Transactional email (password reset, signup link, test)
    - /api/menu: Menu browsing with search and category filters
    - /api/drafts: Order-entry draft sessions
    - /api/staff: Staff roster and shift editing
    - GET /health: System health check

Run: python -m dashboard.main (or uvicorn dashboard.main:app --port 8001)
"""

import logging
from datetime import datetime
from typing import Any, List, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, Query, Request, Header
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from dashboard.core.config import get_settings, setup_logging
from dashboard.ordering import (
    DraftNotFoundError,
    DraftRegistry,
    InvalidDraftError,
    MenuCatalog,
    MenuFilters,
    OrderCartManager,
    get_draft_registry,
    get_menu_catalog,
)
from dashboard.schemas import (
    AddItemRequest,
    DraftCreate,
    DraftResponse,
    DraftUpdate,
    EmailResponse,
    ErrorResponse,
    HealthResponse,
    ItemQuantityResponse,
    MenuItemResponse,
    MenuListResponse,
    ResetPasswordRequest,
    SendPasswordResetRequest,
    SendSignupLinkRequest,
    SendTestEmailRequest,
    SessionResponse,
    SetNewPasswordRequest,
    ShiftUpdate,
    SignInRequest,
    SignUpRequest,
    StaffResponse,
    SubmitDraftRequest,
    SubmitDraftResponse,
    UserResponse,
)
from dashboard.services.identity import (
    AuthError,
    AuthUser,
    BaseIdentityProvider,
    get_identity_provider,
)
from dashboard.services.notifications import (
    BaseNotificationService,
    EmailLineItem,
    NotificationResult,
    get_notification_service,
)
from dashboard.services.notifications.templates import name_from_email
from dashboard.staff import StaffNotFoundError, StaffRoster, get_staff_roster

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    notification_service = get_notification_service()
    identity_provider = get_identity_provider()
    logger.info(f"✅ Notification Service: {notification_service.provider_name}")
    logger.info(f"✅ Identity Provider: {identity_provider.provider_name}")
    logger.info(f"✅ Menu Catalog: {len(get_menu_catalog().items)} items")

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    logger.info(f"Shutting down with {len(get_draft_registry())} open drafts")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Restaurant dashboard backend: order entry, staff shifts, "
        "account flows and transactional email."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.site_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# DEPENDENCIES & HELPERS
# =============================================================================

def _bearer_token(authorization: Optional[str]) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


async def get_access_token(
    authorization: Optional[str] = Header(None),
) -> str:
    return _bearer_token(authorization)


async def get_current_user(
    token: str = Depends(get_access_token),
    identity: BaseIdentityProvider = Depends(get_identity_provider),
) -> AuthUser:
    """Resolve the signed-in user; order entry and staff screens require one."""
    user = await identity.get_user(token)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Session expired or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def _get_draft(registry: DraftRegistry, draft_id: str) -> OrderCartManager:
    try:
        return registry.get(draft_id)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _email_failure(result: NotificationResult, error: str = "Failed to send email") -> JSONResponse:
    logger.error(f"Email delivery failed via {result.provider}: {result.error_message}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=error, detail=result.error_message).model_dump(),
    )


def _email_lines(catalog: MenuCatalog, cart_items) -> List[EmailLineItem]:
    lines = []
    for item in cart_items:
        menu_item = catalog.get(item.menu_item_id)
        lines.append(EmailLineItem(
            name=menu_item.name if menu_item else item.menu_item_id,
            quantity=item.quantity,
            price=item.price,
        ))
    return lines


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    notifications: BaseNotificationService = Depends(get_notification_service),
    identity: BaseIdentityProvider = Depends(get_identity_provider),
    registry: DraftRegistry = Depends(get_draft_registry),
) -> HealthResponse:
    """Verify external providers are reachable."""
    notification_status = "healthy" if await notifications.health_check() else "unhealthy"
    identity_status = "healthy" if await identity.health_check() else "unhealthy"

    overall = "operational" if all(
        s == "healthy" for s in [notification_status, identity_status]
    ) else "degraded"

    return HealthResponse(
        status=overall,
        notification_service=notification_status,
        identity_provider=identity_status,
        open_drafts=len(registry),
        timestamp=datetime.now(),
    )


# =============================================================================
# AUTH ENDPOINTS
# =============================================================================

@app.post("/api/auth/sign-up", response_model=UserResponse, status_code=201, tags=["Auth"])
async def sign_up(
    body: SignUpRequest,
    identity: BaseIdentityProvider = Depends(get_identity_provider),
) -> UserResponse:
    try:
        user = await identity.sign_up(body.email, body.password, body.full_name)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Account created: {user.email}")
    return UserResponse(id=user.id, email=user.email, full_name=user.full_name)


@app.post("/api/auth/sign-in", response_model=SessionResponse, tags=["Auth"])
async def sign_in(
    body: SignInRequest,
    identity: BaseIdentityProvider = Depends(get_identity_provider),
) -> SessionResponse:
    try:
        session = await identity.sign_in(body.email, body.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))

    user = session.user
    return SessionResponse(
        access_token=session.access_token,
        token_type=session.token_type,
        user=UserResponse(id=user.id, email=user.email, full_name=user.full_name),
    )


@app.post("/api/auth/sign-out", tags=["Auth"])
async def sign_out(
    token: str = Depends(get_access_token),
    identity: BaseIdentityProvider = Depends(get_identity_provider),
) -> dict[str, bool]:
    try:
        await identity.sign_out(token)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True}


@app.post("/api/auth/reset-password", tags=["Auth"])
async def reset_password(
    body: ResetPasswordRequest,
    identity: BaseIdentityProvider = Depends(get_identity_provider),
) -> dict[str, Any]:
    """Start the provider's recovery flow; the provider emails the link."""
    try:
        await identity.request_password_reset(body.email, body.redirect_to)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e) or "Failed to send reset password email")

    return {"success": True, "message": "Password reset email sent! Please check your inbox."}


@app.post("/api/auth/set-new-password", tags=["Auth"])
async def set_new_password(
    body: SetNewPasswordRequest,
    token: str = Depends(get_access_token),
    identity: BaseIdentityProvider = Depends(get_identity_provider),
) -> dict[str, Any]:
    try:
        await identity.update_password(token, body.new_password)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e) or "Failed to update password")

    return {"success": True, "message": "Password updated successfully!"}


# =============================================================================
# EMAIL ENDPOINTS
# =============================================================================

@app.post(
    "/api/send-password-reset",
    response_model=EmailResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Email"],
)
async def send_password_reset(
    body: SendPasswordResetRequest,
    notifications: BaseNotificationService = Depends(get_notification_service),
):
    """Email a password reset link supplied by the caller."""
    result = await notifications.send_password_reset(
        to_email=body.email,
        reset_link=body.reset_link,
        customer_name=body.customer_name,
    )
    if not result.success:
        return _email_failure(result)

    return EmailResponse(success=True, message_id=result.message_id)


@app.post(
    "/api/send-signup-link",
    response_model=EmailResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Email"],
)
async def send_signup_link(
    body: SendSignupLinkRequest,
    identity: BaseIdentityProvider = Depends(get_identity_provider),
    notifications: BaseNotificationService = Depends(get_notification_service),
):
    """Generate a signup confirmation link with the identity provider and email it."""
    try:
        action_link = await identity.generate_signup_link(body.email, body.redirect_to or settings.site_url)
    except AuthError as e:
        logger.error(f"Signup link generation failed for {body.email}: {e}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(e) or "Failed to generate signup link").model_dump(),
        )

    result = await notifications.send_signup_confirmation(
        to_email=body.email,
        action_link=action_link,
        customer_name=body.customer_name,
    )
    if not result.success:
        return _email_failure(result)

    return EmailResponse(success=True, message_id=result.message_id)


@app.post(
    "/api/send-test-email",
    response_model=EmailResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Email"],
)
async def send_test_email(
    body: SendTestEmailRequest,
    notifications: BaseNotificationService = Depends(get_notification_service),
):
    result = await notifications.send_email(to_email=body.to, subject=body.subject, body_html=body.html)
    if not result.success:
        return _email_failure(result)

    return EmailResponse(
        success=True,
        message="Test email sent successfully",
        message_id=result.message_id,
    )


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@app.get("/api/menu", response_model=MenuListResponse, tags=["Menu"])
async def list_menu(
    search: str = Query(""),
    category: str = Query("all"),
    include_unavailable: bool = Query(False),
    catalog: MenuCatalog = Depends(get_menu_catalog),
    user: AuthUser = Depends(get_current_user),
) -> MenuListResponse:
    """Menu items matching a name/description search and a category."""
    filters = MenuFilters(catalog.list_items(include_unavailable=include_unavailable))
    filters.set_search_query(search)
    filters.set_selected_category(category)

    return MenuListResponse(
        search=filters.search_query,
        category=filters.selected_category,
        categories=filters.categories,
        items=[MenuItemResponse.from_item(item) for item in filters.filtered_items],
    )


@app.get("/api/menu/categories", tags=["Menu"])
async def list_menu_categories(
    catalog: MenuCatalog = Depends(get_menu_catalog),
    user: AuthUser = Depends(get_current_user),
) -> List[str]:
    return MenuFilters(catalog.list_items()).categories


# =============================================================================
# DRAFT ENDPOINTS
# =============================================================================

@app.post("/api/drafts", response_model=DraftResponse, status_code=201, tags=["Drafts"])
async def open_draft(
    body: Optional[DraftCreate] = None,
    registry: DraftRegistry = Depends(get_draft_registry),
    user: AuthUser = Depends(get_current_user),
) -> DraftResponse:
    """Start an order-entry session, optionally pre-populated."""
    body = body or DraftCreate()
    draft_id, cart = registry.open(
        initial_table=body.initial_table,
        initial_waiter=body.initial_waiter,
        initial_note=body.initial_note,
        initial_items=[item.to_line_item() for item in body.initial_items],
    )
    logger.info(f"{user.email} opened draft {draft_id}")
    return DraftResponse.from_snapshot(draft_id, cart.snapshot())


@app.get("/api/drafts/{draft_id}", response_model=DraftResponse, tags=["Drafts"])
async def get_draft(
    draft_id: str,
    registry: DraftRegistry = Depends(get_draft_registry),
    user: AuthUser = Depends(get_current_user),
) -> DraftResponse:
    cart = _get_draft(registry, draft_id)
    return DraftResponse.from_snapshot(draft_id, cart.snapshot())


@app.patch("/api/drafts/{draft_id}", response_model=DraftResponse, tags=["Drafts"])
async def update_draft(
    draft_id: str,
    body: DraftUpdate,
    registry: DraftRegistry = Depends(get_draft_registry),
    user: AuthUser = Depends(get_current_user),
) -> DraftResponse:
    """Set table, waiter and/or note; any string, including empty, is accepted."""
    cart = _get_draft(registry, draft_id)

    if body.selected_table is not None:
        cart.set_selected_table(body.selected_table)
    if body.selected_waiter is not None:
        cart.set_selected_waiter(body.selected_waiter)
    if body.special_note is not None:
        cart.set_special_note(body.special_note)

    return DraftResponse.from_snapshot(draft_id, cart.snapshot())


@app.post("/api/drafts/{draft_id}/items", response_model=DraftResponse, tags=["Drafts"])
async def add_draft_item(
    draft_id: str,
    body: AddItemRequest,
    registry: DraftRegistry = Depends(get_draft_registry),
    catalog: MenuCatalog = Depends(get_menu_catalog),
    user: AuthUser = Depends(get_current_user),
) -> DraftResponse:
    """Add one unit of a catalog item at its current price."""
    cart = _get_draft(registry, draft_id)

    menu_item = catalog.get(body.menu_item_id)
    if menu_item is None:
        raise HTTPException(status_code=404, detail=f"Menu item {body.menu_item_id} not found")
    if not menu_item.available:
        raise HTTPException(status_code=400, detail=f"{menu_item.name} is currently unavailable")

    cart.add_to_order(menu_item)
    return DraftResponse.from_snapshot(draft_id, cart.snapshot())


@app.get(
    "/api/drafts/{draft_id}/items/{menu_item_id}",
    response_model=ItemQuantityResponse,
    tags=["Drafts"],
)
async def get_draft_item_quantity(
    draft_id: str,
    menu_item_id: str,
    registry: DraftRegistry = Depends(get_draft_registry),
    user: AuthUser = Depends(get_current_user),
) -> ItemQuantityResponse:
    cart = _get_draft(registry, draft_id)
    return ItemQuantityResponse(menu_item_id=menu_item_id, quantity=cart.get_item_quantity(menu_item_id))


@app.delete(
    "/api/drafts/{draft_id}/items/{menu_item_id}",
    response_model=DraftResponse,
    tags=["Drafts"],
)
async def remove_draft_item(
    draft_id: str,
    menu_item_id: str,
    registry: DraftRegistry = Depends(get_draft_registry),
    user: AuthUser = Depends(get_current_user),
) -> DraftResponse:
    """Remove one unit; items not in the draft are ignored."""
    cart = _get_draft(registry, draft_id)
    cart.remove_from_order(menu_item_id)
    return DraftResponse.from_snapshot(draft_id, cart.snapshot())


@app.post("/api/drafts/{draft_id}/reset", response_model=DraftResponse, tags=["Drafts"])
async def reset_draft(
    draft_id: str,
    registry: DraftRegistry = Depends(get_draft_registry),
    user: AuthUser = Depends(get_current_user),
) -> DraftResponse:
    cart = _get_draft(registry, draft_id)
    cart.reset_form()
    return DraftResponse.from_snapshot(draft_id, cart.snapshot())


@app.post(
    "/api/drafts/{draft_id}/submit",
    response_model=SubmitDraftResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Drafts"],
)
async def submit_draft(
    draft_id: str,
    body: Optional[SubmitDraftRequest] = None,
    registry: DraftRegistry = Depends(get_draft_registry),
    catalog: MenuCatalog = Depends(get_menu_catalog),
    notifications: BaseNotificationService = Depends(get_notification_service),
    user: AuthUser = Depends(get_current_user),
) -> SubmitDraftResponse:
    """
    Place the order and clear the draft.

    A confirmation email is sent when a customer email is given; a
    failed email does not fail the order.
    """
    body = body or SubmitDraftRequest()

    try:
        submission = registry.submit(draft_id)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidDraftError as e:
        raise HTTPException(status_code=400, detail=str(e))

    confirmation_sent = False
    if body.customer_email:
        result = await notifications.send_order_confirmation(
            to_email=body.customer_email,
            customer_name=body.customer_name or name_from_email(body.customer_email),
            order_id=submission.order_id,
            total_amount=submission.draft.total_amount,
            items=_email_lines(catalog, submission.draft.order_items),
        )
        confirmation_sent = result.success
        if not result.success:
            logger.warning(f"Order {submission.order_id} confirmation not sent: {result.error_message}")

    return SubmitDraftResponse.from_submission(submission, confirmation_sent)


@app.delete("/api/drafts/{draft_id}", status_code=204, tags=["Drafts"])
async def close_draft(
    draft_id: str,
    registry: DraftRegistry = Depends(get_draft_registry),
    user: AuthUser = Depends(get_current_user),
) -> None:
    registry.close(draft_id)


# =============================================================================
# STAFF ENDPOINTS
# =============================================================================

@app.get("/api/staff", response_model=List[StaffResponse], tags=["Staff"])
async def list_staff(
    roster: StaffRoster = Depends(get_staff_roster),
    user: AuthUser = Depends(get_current_user),
) -> List[StaffResponse]:
    return [StaffResponse.from_member(member) for member in roster.list_staff()]


@app.put("/api/staff/{staff_id}/shift", response_model=StaffResponse, tags=["Staff"])
async def update_staff_shift(
    staff_id: str,
    body: ShiftUpdate,
    roster: StaffRoster = Depends(get_staff_roster),
    user: AuthUser = Depends(get_current_user),
) -> StaffResponse:
    try:
        member = roster.update_shift_time(staff_id, body.shift_start, body.shift_end)
    except StaffNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return StaffResponse.from_member(member)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("dashboard.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
