"""Authentication endpoints for signup, login and the current member."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from app.crud.catalog import PlanCRUD
from app.crud.user import SubscriptionCRUD, UserCRUD
from app.dependencies import (
    get_current_user,
    get_login_orchestrator,
    get_plan_crud,
    get_signup_orchestrator,
    get_subscription_crud,
    get_user_crud,
)
from app.schemas.user_schema import LoginRequest, MeResponse, SignUpRequest, TokenResponse
from app.services.membership.login import LoginOrchestrator
from app.services.membership.signup import SignupOrchestrator

router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignUpRequest,
    orchestrator: SignupOrchestrator = Depends(get_signup_orchestrator),
) -> TokenResponse:
    """
    Redeem a contract code and create a member account.

    Args:
        request: Contract code, profile fields and credentials

    Returns:
        TokenResponse with a bearer token for the new member

    Raises:
        ValidationError (400): Missing fields or passwords do not match
        ContractCodeError (400): Code invalid, not active or expired
        EmailInUseError (409): Email already registered
        UserCreationError (500): Account could not be created
        SignupLoginFailedError (500): Account created, sign-in failed
    """
    token = await orchestrator.signup(request.to_form())
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    orchestrator: LoginOrchestrator = Depends(get_login_orchestrator),
) -> TokenResponse:
    """
    Authenticate a member with email and password.

    Raises:
        ValidationError (400): Email or password missing
        InvalidCredentialsError (401): Credentials rejected
        SubscriptionInactiveError (403): Subscription is not active
    """
    token = await orchestrator.login(request.email or "", request.password or "")
    return TokenResponse(token=token)


@router.get("/me", response_model=MeResponse)
async def get_me(
    current_user: Dict[str, Any] = Depends(get_current_user),
    users: UserCRUD = Depends(get_user_crud),
    subscriptions: SubscriptionCRUD = Depends(get_subscription_crud),
    plans: PlanCRUD = Depends(get_plan_crud),
) -> MeResponse:
    """Return the member profile, subscription and plan for the bearer token."""
    uid = current_user["uid"]

    profile = await users.get_profile(uid)
    subscription = await subscriptions.get_subscription(uid)
    plan = await plans.get_plan(subscription.get("planId") if subscription else None)

    return MeResponse(
        user=profile or {"id": uid, "email": current_user.get("email")},
        subscription=subscription,
        plan=plan,
    )
