"""PayPal REST client used to confirm captures reported by the payment button"""

import logging
from decimal import Decimal, InvalidOperation
import httpx
from portal.utils.errors import PaymentProcessorError

logger = logging.getLogger(__name__)

SANDBOX_API_BASE = "https://api-m.sandbox.paypal.com"


class PayPalClient:
    """Client for the PayPal Orders API"""

    def __init__(self, client_id=None, client_secret=None, base_url=None, timeout=10.0, transport=None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = (base_url or SANDBOX_API_BASE).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def enabled(self):
        return bool(self.client_id and self.client_secret)

    def _access_token(self, client):
        response = client.post(
            f"{self.base_url}/v1/oauth2/token",
            data={"grant_type": "client_credentials"},
            auth=(self.client_id, self.client_secret),
        )
        response.raise_for_status()
        return response.json()["access_token"]

    def get_order(self, order_id):
        """
        Fetch an order from PayPal.

        Raises:
            PaymentProcessorError: On timeout, HTTP errors, or invalid response
        """
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                token = self._access_token(client)
                response = client.get(
                    f"{self.base_url}/v2/checkout/orders/{order_id}",
                    headers={"Authorization": f"Bearer {token}"},
                )
                response.raise_for_status()
                return response.json()
            except httpx.TimeoutException as e:
                raise PaymentProcessorError(f"PayPal timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise PaymentProcessorError(f"PayPal error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise PaymentProcessorError("PayPal is unreachable") from e
            except (KeyError, ValueError) as e:
                raise PaymentProcessorError(f"Invalid response from PayPal: {e}") from e

    def confirm_capture(self, capture, amount):
        """
        Check that the order behind a capture is COMPLETED for the expected amount.
        Without credentials the button's report is accepted as is.
        """
        if not self.enabled:
            return capture

        order = self.get_order(capture.transaction_id)
        if order.get("status") != "COMPLETED":
            raise PaymentProcessorError(f"Payment status is {order.get('status')}", status_code=400)

        try:
            captured = Decimal(str(order["purchase_units"][0]["amount"]["value"]))
        except (KeyError, IndexError, InvalidOperation) as e:
            raise PaymentProcessorError("PayPal order has no amount") from e

        if captured != amount:
            logger.warning(f"Order {capture.transaction_id} captured {captured}, expected {amount}")
            raise PaymentProcessorError("Captured amount does not match the payment", status_code=400)
        return capture
