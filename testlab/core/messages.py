"""
User-facing messages.

The page is Norwegian first (``nb``); ``en`` is available through the
``LOCALE`` setting. Errors are never shown raw: ``Messages.for_error`` turns
any exception into one short sentence from the active catalog.
"""
import logging
from typing import Dict, Optional

from .errors import (
    AlreadyMemberError,
    AlreadySharedError,
    ApplicationError,
    AuthApiError,
    BackendConnectionError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "nb"

CATALOGS: Dict[str, Dict[str, str]] = {
    "nb": {
        "loading": "Laster...",
        "error.generic": "En feil oppstod",
        "error.network": "Kunne ikke kontakte serveren. Prøv igjen senere.",
        "auth.failed": "Innlogging mislyktes",
        "auth.invalid_credentials": "Feil e-post eller passord",
        "auth.email_not_confirmed": "E-posten er ikke bekreftet ennå",
        "auth.user_exists": "Det finnes allerede en konto med denne e-posten",
        "auth.weak_password": "Passordet er for svakt",
        "auth.not_signed_in": "Du må være logget inn",
        "callback.pending": "Bekrefter e-posten din...",
        "callback.confirmed": "E-post bekreftet! Du kan nå lukke dette vinduet og logge inn.",
        "callback.unconfirmed": "Kunne ikke bekrefte e-post. Vennligst prøv å logge inn.",
        "callback.invalid_link": "Ugyldig bekreftelseslenke.",
        "callback.failed": "En feil oppstod under bekreftelsen.",
        "user.not_found": "Bruker ikke funnet",
        "companies.fetch_failed": "Kunne ikke hente selskaper",
        "companies.create_failed": "Kunne ikke opprette selskap",
        "members.fetch_failed": "Kunne ikke hente medlemmer",
        "members.add_failed": "Kunne ikke legge til medlem",
        "members.remove_failed": "Kunne ikke fjerne medlem",
        "members.already_member": "Brukeren er allerede medlem av dette selskapet",
        "products.fetch_failed": "Kunne ikke hente produkter",
        "products.create_failed": "Kunne ikke opprette produkt",
        "tests.fetch_failed": "Kunne ikke hente tester",
        "tests.create_failed": "Kunne ikke opprette test",
        "testers.fetch_failed": "Kunne ikke hente deltakere",
        "testers.create_failed": "Kunne ikke legge til deltaker",
        "results.fetch_failed": "Kunne ikke hente resultater",
        "share.failed": "Kunne ikke dele testen",
        "share.already_shared": "Testen er allerede delt med denne brukeren",
        "share.success": "Testen er delt!",
        "dashboard.stats_failed": "Kunne ikke hente oversikt",
    },
    "en": {
        "loading": "Loading...",
        "error.generic": "An error occurred",
        "error.network": "Could not reach the server. Please try again later.",
        "auth.failed": "Sign-in failed",
        "auth.invalid_credentials": "Wrong e-mail or password",
        "auth.email_not_confirmed": "The e-mail address has not been confirmed yet",
        "auth.user_exists": "An account with this e-mail already exists",
        "auth.weak_password": "The password is too weak",
        "auth.not_signed_in": "You must be signed in",
        "callback.pending": "Confirming your e-mail...",
        "callback.confirmed": "E-mail confirmed! You can close this window and sign in.",
        "callback.unconfirmed": "Could not confirm e-mail. Please try signing in.",
        "callback.invalid_link": "Invalid confirmation link.",
        "callback.failed": "An error occurred during confirmation.",
        "user.not_found": "User not found",
        "companies.fetch_failed": "Could not fetch companies",
        "companies.create_failed": "Could not create company",
        "members.fetch_failed": "Could not fetch members",
        "members.add_failed": "Could not add member",
        "members.remove_failed": "Could not remove member",
        "members.already_member": "The user is already a member of this company",
        "products.fetch_failed": "Could not fetch products",
        "products.create_failed": "Could not create product",
        "tests.fetch_failed": "Could not fetch tests",
        "tests.create_failed": "Could not create test",
        "testers.fetch_failed": "Could not fetch testers",
        "testers.create_failed": "Could not add tester",
        "results.fetch_failed": "Could not fetch results",
        "share.failed": "Could not share the test",
        "share.already_shared": "The test is already shared with this user",
        "share.success": "The test has been shared!",
        "dashboard.stats_failed": "Could not fetch overview",
    },
}

# Backend auth error codes -> catalog keys
AUTH_ERROR_KEYS: Dict[str, str] = {
    "invalid_credentials": "auth.invalid_credentials",
    "invalid_grant": "auth.invalid_credentials",
    "email_not_confirmed": "auth.email_not_confirmed",
    "user_already_exists": "auth.user_exists",
    "email_exists": "auth.user_exists",
    "weak_password": "auth.weak_password",
}


class Messages:
    """Message lookup for one locale, falling back to ``nb`` and then to the key."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        if locale not in CATALOGS:
            logger.warning(f"Unknown locale '{locale}', falling back to '{DEFAULT_LOCALE}'")
            locale = DEFAULT_LOCALE
        self.locale = locale

    def get(self, key: str) -> str:
        catalog = CATALOGS[self.locale]
        if key in catalog:
            return catalog[key]
        return CATALOGS[DEFAULT_LOCALE].get(key, key)

    def for_error(self, exc: BaseException, fallback_key: str = "error.generic") -> str:
        return self.get(error_message_key(exc, fallback_key))


def error_message_key(exc: BaseException, fallback_key: str = "error.generic") -> str:
    """Pick the catalog key describing ``exc``.

    Known application failures map to a specific key or ``fallback_key``;
    anything unexpected is logged with its traceback and becomes the
    generic failure message.
    """
    if isinstance(exc, UserNotFoundError):
        return "user.not_found"
    if isinstance(exc, AlreadyMemberError):
        return "members.already_member"
    if isinstance(exc, AlreadySharedError):
        return "share.already_shared"
    if isinstance(exc, AuthApiError):
        return AUTH_ERROR_KEYS.get(exc.code or "", "auth.failed")
    if isinstance(exc, BackendConnectionError):
        return "error.network"
    if isinstance(exc, ApplicationError):
        return fallback_key

    logger.exception("Unexpected error", exc_info=exc)
    return "error.generic"


def get_messages(locale: Optional[str] = None) -> Messages:
    if locale is None:
        from .config import get_config
        locale = get_config().locale
    return Messages(locale)
