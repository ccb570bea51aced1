"""Authentication service - the shop's single hardcoded account."""
import hmac
import logging

from tailorshop.exceptions import UnauthorizedError
from tailorshop.store.actions import Login, Logout

logger = logging.getLogger(__name__)


def check_credentials(username: str, password: str, config) -> bool:
    """Constant-time comparison against the configured account."""
    expected_user = config.get('APP_USERNAME', '')
    expected_password = config.get('APP_PASSWORD', '')
    user_ok = hmac.compare_digest((username or '').encode(), expected_user.encode())
    password_ok = hmac.compare_digest((password or '').encode(), expected_password.encode())
    return user_ok and password_ok


def login(store, storage, config, username: str, password: str, remember: bool = False) -> None:
    """
    Log in. With ``remember`` the flag survives a restart.

    Raises:
        UnauthorizedError: wrong username or password
    """
    if not check_credentials(username, password, config):
        logger.warning("[AUTH] Failed login attempt")
        raise UnauthorizedError('Invalid username or password')

    if remember:
        storage.set(config.get('AUTH_STORAGE_KEY', 'tailorShopAuth'), 'true')
    store.dispatch(Login())
    logger.info(f"[AUTH] Logged in (remember={remember})")


def logout(store, storage, config) -> None:
    storage.remove(config.get('AUTH_STORAGE_KEY', 'tailorShopAuth'))
    store.dispatch(Logout())
    logger.info("[AUTH] Logged out")
