"""High-level typed interface to lightningd."""
import logging
from typing import Any, Dict, List, Optional

from .client import UnixSocketClient
from .config import ClientConfig
from .responses import (
    Close,
    Connect,
    DecodePay,
    GetInfo,
    Help,
    Invoice,
    ListChannels,
    ListFunds,
    ListInvoice,
    ListInvoices,
    ListNodes,
    ListPeers,
    NewAddr,
    PayResponse,
    Ping,
)

logger = logging.getLogger(__name__)


def _params(**kwargs: Any) -> Dict[str, Any]:
    """Build a params object, leaving out arguments that were not given."""
    return {key: value for key, value in kwargs.items() if value is not None}


class LightningRPC:
    """Typed wrappers around the lightningd RPC methods.

    Example:
        >>> rpc = LightningRPC("/home/user/.lightning/lightning-rpc")
        >>> info = rpc.getinfo()
        >>> print(info.id, info.blockheight)
    """

    def __init__(self, socket_path: str, timeout: Optional[float] = 30):
        self.client = UnixSocketClient(socket_path, timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "LightningRPC":
        return cls(config.expanded_socket_path, timeout=config.timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.client.close()

    def _call(self, method: str, params: Optional[Dict[str, Any]] = None, result_type: Any = Any) -> Any:
        return self.client.call(method, params, result_type)

    def getinfo(self) -> GetInfo:
        """Show information about this node."""
        return self._call("getinfo", result_type=GetInfo)

    def listpeers(self, id: Optional[str] = None, level: Optional[str] = None) -> ListPeers:
        """Show connected peers, optionally only ``id``, with logs at ``level``."""
        return self._call("listpeers", _params(id=id, level=level), ListPeers)

    def listnodes(self, id: Optional[str] = None) -> ListNodes:
        return self._call("listnodes", _params(id=id), ListNodes)

    def listchannels(self, short_channel_id: Optional[str] = None) -> ListChannels:
        return self._call("listchannels", _params(short_channel_id=short_channel_id), ListChannels)

    def listfunds(self) -> ListFunds:
        """Show on-chain outputs and channel funds available."""
        return self._call("listfunds", result_type=ListFunds)

    def listinvoices(self, label: Optional[str] = None) -> ListInvoices:
        return self._call("listinvoices", _params(label=label), ListInvoices)

    def invoice(
        self,
        msatoshi: Any,
        label: str,
        description: str,
        expiry: Optional[int] = None,
        fallbacks: Optional[List[str]] = None,
        preimage: Optional[str] = None,
    ) -> Invoice:
        """Create an invoice for ``msatoshi`` (an int, or "any").

        Args:
            msatoshi: Amount in millisatoshi, or "any" for a donation invoice
            label: Unique label for the invoice
            description: Description embedded in the invoice
            expiry: Seconds until the invoice expires
            fallbacks: On-chain fallback addresses
            preimage: Hex payment preimage to use instead of a random one

        Returns:
            Invoice with its bolt11 string and payment hash
        """
        params = _params(
            msatoshi=msatoshi,
            label=label,
            description=description,
            expiry=expiry,
            fallbacks=fallbacks,
            preimage=preimage,
        )
        return self._call("invoice", params, Invoice)

    def delinvoice(self, label: str, status: str) -> ListInvoice:
        """Delete the invoice ``label`` if it has ``status``."""
        return self._call("delinvoice", _params(label=label, status=status), ListInvoice)

    def waitinvoice(self, label: str) -> ListInvoice:
        """Block until the invoice ``label`` is paid or expires."""
        return self._call("waitinvoice", _params(label=label), ListInvoice)

    def pay(
        self,
        bolt11: str,
        msatoshi: Optional[int] = None,
        description: Optional[str] = None,
        riskfactor: Optional[float] = None,
        maxfeepercent: Optional[float] = None,
        exemptfee: Optional[int] = None,
        retry_for: Optional[int] = None,
        maxdelay: Optional[int] = None,
    ) -> PayResponse:
        """Pay a bolt11 invoice.

        ``msatoshi`` is only needed for invoices without an amount, and
        ``description`` only for invoices that commit to a description hash.
        """
        params = _params(
            bolt11=bolt11,
            msatoshi=msatoshi,
            description=description,
            riskfactor=riskfactor,
            maxfeepercent=maxfeepercent,
            exemptfee=exemptfee,
            retry_for=retry_for,
            maxdelay=maxdelay,
        )
        logger.info(f"Paying invoice {bolt11[:20]}...")
        return self._call("pay", params, PayResponse)

    def decodepay(self, bolt11: str, description: Optional[str] = None) -> DecodePay:
        return self._call("decodepay", _params(bolt11=bolt11, description=description), DecodePay)

    def newaddr(self, addresstype: Optional[str] = None) -> NewAddr:
        """Get a new on-chain address ("bech32" or "p2sh-segwit")."""
        return self._call("newaddr", _params(addresstype=addresstype), NewAddr)

    def connect(self, id: str, host: Optional[str] = None, port: Optional[int] = None) -> Connect:
        return self._call("connect", _params(id=id, host=host, port=port), Connect)

    def close(self, id: str, force: Optional[bool] = None, timeout: Optional[int] = None) -> Close:
        """Close the channel with peer ``id``; ``force`` allows a unilateral close."""
        return self._call("close", _params(id=id, force=force, timeout=timeout), Close)

    def ping(self, id: str, len: Optional[int] = None, pongbytes: Optional[int] = None) -> Ping:
        return self._call("ping", _params(id=id, len=len, pongbytes=pongbytes), Ping)

    def help(self) -> Help:
        """List the commands the daemon supports."""
        return self._call("help", result_type=Help)

    def stop(self) -> str:
        """Shut the daemon down."""
        logger.info("Requesting lightningd shutdown")
        return self._call("stop", result_type=str)
