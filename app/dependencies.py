"""
Shared application dependencies.
Supports both Firebase mode and local development mode.

Clients are built once per process (see ``create_clients``) and stored on
``app.state``; request handlers receive them through FastAPI dependencies.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from app.config import Settings
from app.crud.catalog import CategoryCRUD, PlanCRUD, ScheduleCRUD
from app.crud.contract_code import ContractCodeCRUD
from app.crud.redemption import RedemptionCRUD
from app.crud.user import SubscriptionCRUD, UserCRUD
from app.crud.visit import VisitCRUD
from app.services.identity import CredentialExchange, IdentityService
from app.services.membership.contract_codes import ContractCodeValidator
from app.services.membership.login import LoginOrchestrator
from app.services.membership.signup import SignupOrchestrator
from app.utils.exceptions import AuthenticationError, TokenVerificationError
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Clients:
    """Process-scoped clients shared by all requests."""

    db: Any
    identity: IdentityService
    credentials: CredentialExchange

    async def aclose(self) -> None:
        closer = getattr(self.credentials, "aclose", None)
        if closer is not None:
            await closer()


def create_clients(settings: Settings) -> Clients:
    """Build the store and identity clients - Firebase in prod, local in dev."""
    if settings.use_local_services:
        from app.services.local_identity import LocalIdentityService
        from app.services.local_store import LocalStore

        logger.info("Firebase credentials not found - running in LOCAL DEV mode")
        store = LocalStore(Path(settings.local_data_dir))
        identity = LocalIdentityService(store, settings)
        return Clients(db=store, identity=identity, credentials=identity)

    from app.services.firebase.auth_service import (
        FirebaseService,
        get_firestore_client,
        initialize_firebase,
    )
    from app.services.firebase.credential_exchange import CredentialExchangeAdapter

    firebase_app = initialize_firebase(settings)
    logger.info("Using Firestore database")
    return Clients(
        db=get_firestore_client(firebase_app),
        identity=FirebaseService(firebase_app),
        credentials=CredentialExchangeAdapter.from_settings(settings),
    )


def get_clients(request: Request) -> Clients:
    return request.app.state.clients


def get_db_client(clients: Clients = Depends(get_clients)):
    """Get database client - Firestore or LocalStore."""
    return clients.db


def get_identity_service(clients: Clients = Depends(get_clients)) -> IdentityService:
    return clients.identity


def get_credential_exchange(clients: Clients = Depends(get_clients)) -> CredentialExchange:
    return clients.credentials


def get_contract_code_validator(db=Depends(get_db_client)) -> ContractCodeValidator:
    return ContractCodeValidator(ContractCodeCRUD(db))


def get_signup_orchestrator(
    clients: Clients = Depends(get_clients),
    validator: ContractCodeValidator = Depends(get_contract_code_validator),
) -> SignupOrchestrator:
    return SignupOrchestrator(
        validator=validator,
        redemption=RedemptionCRUD(clients.db),
        identity=clients.identity,
        credentials=clients.credentials,
    )


def get_login_orchestrator(clients: Clients = Depends(get_clients)) -> LoginOrchestrator:
    return LoginOrchestrator(
        credentials=clients.credentials,
        identity=clients.identity,
        subscriptions=SubscriptionCRUD(clients.db),
    )


def get_plan_crud(db=Depends(get_db_client)) -> PlanCRUD:
    return PlanCRUD(db)


def get_category_crud(db=Depends(get_db_client)) -> CategoryCRUD:
    return CategoryCRUD(db)


def get_schedule_crud(db=Depends(get_db_client)) -> ScheduleCRUD:
    return ScheduleCRUD(db)


def get_visit_crud(db=Depends(get_db_client)) -> VisitCRUD:
    return VisitCRUD(db)


def get_user_crud(db=Depends(get_db_client)) -> UserCRUD:
    return UserCRUD(db)


def get_subscription_crud(db=Depends(get_db_client)) -> SubscriptionCRUD:
    return SubscriptionCRUD(db)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    identity: IdentityService = Depends(get_identity_service),
) -> Dict[str, Any]:
    """Get current user claims from the bearer token."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Missing auth token")

    token = authorization[len("Bearer "):]
    try:
        decoded = await identity.verify_token(token)
    except TokenVerificationError as e:
        raise AuthenticationError("Invalid auth token") from e

    uid = decoded.get("uid")
    if not uid:
        raise AuthenticationError("Invalid auth token")
    return {"uid": uid, "email": decoded.get("email")}
