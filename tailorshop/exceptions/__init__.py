"""Custom exceptions for the tailor shop application."""

class TailorShopError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        return rv

class BusinessLogicError(TailorShopError):
    """Exception raised for business logic violations."""
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)

class NotFoundError(TailorShopError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)

class AssignmentValidationError(BusinessLogicError):
    """Raised when work assignment groups do not fit the ordered quantity."""
    def __init__(self, assigned, quantity):
        message = f"Cannot assign more than {quantity} units ({assigned} requested)."
        super().__init__(message, payload={'assigned': assigned, 'quantity': quantity})
        self.assigned = assigned
        self.quantity = quantity

class ImportSchemaError(BusinessLogicError):
    """Raised when a backup file cannot be restored."""
    def __init__(self, message="Invalid backup file format. Missing required data.", missing=None):
        payload = {'missing': list(missing)} if missing else None
        super().__init__(message, payload=payload)

class UnauthorizedError(TailorShopError):
    """Raised when the caller is not logged in or credentials are wrong."""
    def __init__(self, message="Unauthorized access"):
        super().__init__(message, 401)
