"""
Transfer intent gateway.

The rest of the app only sees two calls: create an intent to move funds
to a destination, and ask for an intent's status. OpenfortGateway talks
to the Openfort API over httpx; MockTransferGateway stands in when no API
key is configured (local development, tests).
"""

import hashlib
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN
from typing import Optional

import httpx
from django.conf import settings

from .exceptions import TransferGatewayError

logger = logging.getLogger(__name__)


INTENT_PENDING = 'pending'
INTENT_COMPLETED = 'completed'
INTENT_FAILED = 'failed'

CURRENCY_DECIMALS = {
    'ETH': 18,
    'MATIC': 18,
    'USDC': 6,
}

NATIVE_CURRENCIES = ('ETH', 'MATIC')

# transfer(address,uint256)
ERC20_TRANSFER_SELECTOR = 'a9059cbb'


@dataclass(frozen=True)
class IntentStatus:
    """Status of a transfer intent as reported by the gateway."""

    status: str  # "pending", "completed" or "failed"
    tx_hash: Optional[str] = None


def to_minor_units(amount: Decimal, currency: str) -> int:
    """
    Convert a decimal amount to the currency's smallest unit.

    ETH and MATIC use 18 decimals (wei), USDC uses 6. Digits beyond the
    currency's precision are truncated.
    """
    try:
        decimals = CURRENCY_DECIMALS[currency]
    except KeyError:
        raise ValueError(f"Unsupported currency: {currency}")

    scaled = Decimal(amount).scaleb(decimals).quantize(Decimal('1'), rounding=ROUND_DOWN)
    return int(scaled)


def encode_erc20_transfer(to: str, amount: int) -> str:
    """ABI-encode an ERC-20 transfer(to, amount) call as 0x-prefixed hex."""
    address = to.lower().removeprefix('0x')
    if len(address) != 40:
        raise ValueError(f"Invalid address: {to}")
    return '0x' + ERC20_TRANSFER_SELECTOR + address.rjust(64, '0') + format(amount, 'x').rjust(64, '0')


class TransferGateway(ABC):
    """Contract every transfer gateway implements."""

    @abstractmethod
    def create_intent(self, destination: str, amount_minor_units: int, chain_params: dict) -> str:
        """
        Ask the provider to move funds.

        Args:
            destination: Recipient address
            amount_minor_units: Amount in the currency's smallest unit
            chain_params: chain_id, currency and, for tokens, token_address

        Returns:
            Provider intent id

        Raises:
            TransferGatewayError: If the provider rejects or cannot be reached
        """
        pass

    @abstractmethod
    def get_intent_status(self, intent_id: str) -> IntentStatus:
        """
        Look up the status of an intent.

        Raises:
            TransferGatewayError: If the provider rejects or cannot be reached
        """
        pass


class OpenfortGateway(TransferGateway):
    """Openfort transaction intents over HTTP."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        account_id: str = '',
        timeout: float = 10.0,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip('/')
        self._account_id = account_id
        self._timeout = httpx.Timeout(timeout)

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self._base_url}{path}"
        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.request(method, url, headers=self._headers(), **kwargs)
                response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            # Provider body stays in the log, never in the API response
            logger.warning(
                "Openfort %s %s failed with %s: %s",
                method, path, e.response.status_code, e.response.text[:500],
            )
            raise TransferGatewayError()
        except httpx.HTTPError as e:
            logger.warning("Openfort %s %s failed: %s", method, path, e)
            raise TransferGatewayError()
        except ValueError:
            logger.warning("Openfort %s %s returned invalid JSON", method, path)
            raise TransferGatewayError()

    @staticmethod
    def build_interaction(destination: str, amount_minor_units: int, chain_params: dict) -> dict:
        """
        Build the call Openfort should execute.

        Native currencies send value directly; tokens call transfer() on
        the token contract with zero value.
        """
        currency = chain_params.get('currency', 'USDC')
        if currency in NATIVE_CURRENCIES:
            return {'to': destination, 'value': str(amount_minor_units), 'data': '0x'}

        token_address = chain_params.get('token_address')
        if not token_address:
            raise TransferGatewayError(f"No token contract configured for {currency}")
        return {
            'to': token_address,
            'value': '0',
            'data': encode_erc20_transfer(destination, amount_minor_units),
        }

    def create_intent(self, destination: str, amount_minor_units: int, chain_params: dict) -> str:
        payload = {
            'chainId': chain_params['chain_id'],
            'interactions': [
                self.build_interaction(destination, amount_minor_units, chain_params)
            ],
        }
        if self._account_id:
            payload['account'] = self._account_id
        if chain_params.get('metadata'):
            payload['metadata'] = chain_params['metadata']

        data = self._request('POST', '/transaction_intents', json=payload)
        intent_id = data.get('id')
        if not intent_id:
            logger.warning("Openfort returned no intent id")
            raise TransferGatewayError()

        logger.info("Openfort intent %s created for %s", intent_id, destination)
        return intent_id

    def get_intent_status(self, intent_id: str) -> IntentStatus:
        data = self._request('GET', f'/transaction_intents/{intent_id}')

        # `response` appears once the intent has been mined; status 1 is success
        mined = data.get('response') or {}
        if not mined:
            return IntentStatus(status=INTENT_PENDING)
        if mined.get('status') == 1:
            return IntentStatus(status=INTENT_COMPLETED, tx_hash=mined.get('transactionHash'))
        return IntentStatus(status=INTENT_FAILED, tx_hash=mined.get('transactionHash'))


class MockTransferGateway(TransferGateway):
    """
    In-process gateway for development.

    Intents complete immediately with a hash derived from the intent id.
    """

    def create_intent(self, destination: str, amount_minor_units: int, chain_params: dict) -> str:
        intent_id = f"mock_intent_{uuid.uuid4().hex}"
        logger.info("Mock intent %s created for %s (%s minor units)", intent_id, destination, amount_minor_units)
        return intent_id

    def get_intent_status(self, intent_id: str) -> IntentStatus:
        tx_hash = '0x' + hashlib.sha256(intent_id.encode()).hexdigest()
        return IntentStatus(status=INTENT_COMPLETED, tx_hash=tx_hash)


def get_transfer_gateway() -> TransferGateway:
    """Openfort when an API key is configured, the mock otherwise."""
    if settings.OPENFORT_API_KEY:
        return OpenfortGateway(
            api_key=settings.OPENFORT_API_KEY,
            base_url=settings.OPENFORT_BASE_URL,
            account_id=settings.OPENFORT_ACCOUNT_ID,
            timeout=settings.OPENFORT_TIMEOUT,
        )
    return MockTransferGateway()


def chain_params_for(currency: str, metadata: Optional[dict] = None) -> dict:
    params = {
        'chain_id': settings.OPENFORT_CHAIN_ID,
        'currency': currency,
    }
    if currency not in NATIVE_CURRENCIES:
        params['token_address'] = settings.OPENFORT_USDC_CONTRACT_ADDRESS
    if metadata:
        params['metadata'] = metadata
    return params
