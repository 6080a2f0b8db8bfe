"""Google sign-in: validate ID tokens issued to the portal's OAuth client"""

import logging
import httpx
from portal.utils.errors import IdentityProviderError

logger = logging.getLogger(__name__)

TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
VALID_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


def email_is_verified(claims):
    # tokeninfo sends the flag as a string
    return claims.get("email_verified") in ("true", True)


class GoogleIdentityClient:
    def __init__(self, client_id=None, tokeninfo_url=None, timeout=10.0, transport=None):
        self.client_id = client_id
        self.tokeninfo_url = tokeninfo_url or TOKENINFO_URL
        self.timeout = timeout
        self.transport = transport

    def verify_id_token(self, id_token):
        """
        Return the token's claims (sub, email, name, picture).

        Raises:
            IdentityProviderError: when the token is invalid, issued for another
            client, or Google cannot be reached
        """
        if not self.client_id:
            raise IdentityProviderError("Google sign-in is not configured", status_code=503)

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(self.tokeninfo_url, params={"id_token": id_token})
        except httpx.RequestError as e:
            logger.error(f"Google tokeninfo unreachable: {e}")
            raise IdentityProviderError("Google sign-in is unavailable", status_code=502) from e

        if response.status_code != 200:
            raise IdentityProviderError("Invalid Google token")

        claims = response.json()
        if claims.get("aud") != self.client_id or claims.get("iss") not in VALID_ISSUERS:
            raise IdentityProviderError("Invalid Google token")
        if not claims.get("sub") or not claims.get("email"):
            raise IdentityProviderError("Google token has no email")
        if not email_is_verified(claims):
            raise IdentityProviderError("Google account email is not verified")
        return claims
