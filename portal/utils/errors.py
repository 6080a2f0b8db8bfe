class PortalError(Exception):
    """Base error carrying the user-facing message and HTTP status."""

    status_code = 400
    message = "An unexpected error occurred"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code:
            self.status_code = status_code

    def to_response(self):
        return {"message": self.message}, self.status_code


class NotFoundError(PortalError):
    status_code = 404
    message = "Not found"


class IdentityNotMatched(PortalError):
    # deliberately generic, never says which field was wrong
    status_code = 400
    message = "We could not verify your identity. Please check your information and try again."


class EmailMismatch(PortalError):
    status_code = 400
    message = "The email provided does not match our records."


class VerificationThrottled(PortalError):
    status_code = 429
    message = "Too many verification attempts. Please try again later."


class VerificationWriteError(PortalError):
    status_code = 500
    message = "An error occurred while verifying your identity."


class InvalidPaymentAmount(PortalError):
    status_code = 400
    message = "Invalid payment amount"


class PaymentProcessorError(PortalError):
    status_code = 502
    message = "The payment could not be confirmed with the processor"


class PaymentRecordError(PortalError):
    status_code = 500
    message = "Failed to process payment"


class IdentityProviderError(PortalError):
    status_code = 401
    message = "Could not sign in with the identity provider"
