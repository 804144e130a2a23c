"""
Firebase authentication service.
Verifies Firebase ID tokens and performs account operations with the Admin SDK.
"""

import logging
from typing import Optional

import firebase_admin
from firebase_admin import auth as firebase_auth, credentials, exceptions

from app.config import Settings, get_settings
from app.domain.models.base import ExternalServiceError, ValidationError
from app.domain.services.gateways import IdentityProvider, VerifiedIdentity


logger = logging.getLogger(__name__)


def initialize_firebase_app(settings: Settings) -> firebase_admin.App:
    """Return the default Firebase app, creating it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if settings.firebase_client_email and settings.firebase_private_key:
        credential = credentials.Certificate({
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "client_email": settings.firebase_client_email,
            "private_key": settings.firebase_private_key,
            "token_uri": "https://oauth2.googleapis.com/token",
        })
        logger.info("Initializing Firebase Admin with service account credentials")
        return firebase_admin.initialize_app(credential, {"projectId": settings.firebase_project_id})

    # Application default credentials, e.g. on Cloud Run
    logger.warning("Firebase service account not configured, using default credentials")
    return firebase_admin.initialize_app(options={"projectId": settings.firebase_project_id})


class FirebaseAuthService(IdentityProvider):
    """Service for Firebase authentication operations."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.app = initialize_firebase_app(self.settings)

    def verify_token(self, token: str) -> VerifiedIdentity:
        """
        Verify a Firebase ID token.

        Raises:
            ValidationError: If the token is invalid, expired or revoked
        """
        try:
            claims = firebase_auth.verify_id_token(token, app=self.app)
        except (ValueError, firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError,
                firebase_auth.RevokedIdTokenError, firebase_auth.CertificateFetchError) as e:
            logger.info(f"Token verification failed: {e}")
            raise ValidationError("Invalid or expired token")

        return VerifiedIdentity(uid=claims["uid"], email=claims.get("email"), claims=claims)

    def generate_password_reset_link(self, email: str) -> str:
        try:
            return firebase_auth.generate_password_reset_link(email, app=self.app)
        except exceptions.FirebaseError as e:
            raise ExternalServiceError("firebase", f"Password reset failed: {e}")

    def create_custom_token(self, uid: str) -> str:
        try:
            token = firebase_auth.create_custom_token(uid, app=self.app)
        except (ValueError, exceptions.FirebaseError) as e:
            raise ExternalServiceError("firebase", f"Failed to create custom token: {e}")
        return token.decode("utf-8") if isinstance(token, bytes) else token
