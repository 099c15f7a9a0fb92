"""
Errors raised by the issuer and the stores. Endpoints turn them into OAuth-style error bodies.
"""


class MockAuthError(Exception):
    pass


class TokenRequestError(MockAuthError):
    """A token request was rejected. Always a client error (400); nothing was written."""

    error = "invalid_request"

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description

    def to_detail(self) -> dict:
        return {"error": self.error, "error_description": self.description}


class UnsupportedGrantTypeError(TokenRequestError):
    error = "unsupported_grant_type"


class InvalidClientError(TokenRequestError):
    # Unknown client and wrong secret must be indistinguishable
    error = "invalid_client"

    def __init__(self):
        super().__init__("Invalid client credentials")


class InvalidRequestError(TokenRequestError):
    error = "invalid_request"


class InvalidScopeError(TokenRequestError):
    error = "invalid_scope"


class StoreError(MockAuthError):
    """Backing store failed. Propagated as an internal error, never retried."""


class ClientExistsError(StoreError):
    def __init__(self, client_id: str):
        super().__init__(f"Client already exists: {client_id}")
        self.client_id = client_id
