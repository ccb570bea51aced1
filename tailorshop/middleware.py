"""Request helpers: access to the store and the login gate."""
from functools import wraps

from flask import current_app, request, session

from tailorshop.exceptions import BusinessLogicError, UnauthorizedError


def get_store():
    """The application's Store."""
    return current_app.extensions['tailorshop']['store']


def get_storage():
    """The application's StateStorage."""
    return current_app.extensions['tailorshop']['storage']


def json_body() -> dict:
    """Request JSON object, or a BusinessLogicError when the body is not one."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BusinessLogicError('Request body must be a JSON object.')
    return data


def is_logged_in() -> bool:
    """Whether this client's session carries a login."""
    return bool(session.get('authenticated'))


def require_login(f):
    """
    Decorator: Require this client to be logged in.

    Raises UnauthorizedError (401) otherwise.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_logged_in():
            raise UnauthorizedError('Please log in first.')
        return f(*args, **kwargs)
    return decorated_function
