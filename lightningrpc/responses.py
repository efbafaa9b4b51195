"""Result models for lightningd RPC methods.

Every model allows fields it does not declare so that newer daemon versions
can add output without breaking decoding.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class LightningModel(BaseModel):
    """Base model for lightningd results."""

    model_config = ConfigDict(extra="allow")


class NetworkAddress(LightningModel):
    type: str
    address: Optional[str] = None
    port: Optional[int] = None


class GetInfo(LightningModel):
    """Result of ``getinfo``."""

    id: str
    alias: Optional[str] = None
    color: Optional[str] = None
    address: List[NetworkAddress] = []
    binding: List[NetworkAddress] = []
    version: str
    blockheight: int
    network: str


class Channel(LightningModel):
    state: str
    owner: Optional[str] = None
    short_channel_id: Optional[str] = None
    channel_id: Optional[str] = None
    funding_txid: Optional[str] = None
    msatoshi_to_us: Optional[int] = None
    msatoshi_total: Optional[int] = None


class Peer(LightningModel):
    id: str
    connected: bool
    netaddr: List[str] = []
    channels: List[Channel] = []


class ListPeers(LightningModel):
    """Result of ``listpeers``."""

    peers: List[Peer]


class Node(LightningModel):
    nodeid: str
    alias: Optional[str] = None
    color: Optional[str] = None
    last_timestamp: Optional[int] = None
    addresses: List[NetworkAddress] = []


class ListNodes(LightningModel):
    """Result of ``listnodes``."""

    nodes: List[Node]


class ChannelUpdate(LightningModel):
    source: str
    destination: str
    short_channel_id: str
    public: Optional[bool] = None
    active: Optional[bool] = None
    last_update: Optional[int] = None
    base_fee_millisatoshi: Optional[int] = None
    fee_per_millionth: Optional[int] = None
    delay: Optional[int] = None


class ListChannels(LightningModel):
    """Result of ``listchannels``."""

    channels: List[ChannelUpdate]


class FundOutput(LightningModel):
    txid: str
    output: int
    value: int
    status: Optional[str] = None


class FundChannel(LightningModel):
    peer_id: str
    short_channel_id: Optional[str] = None
    channel_sat: Optional[int] = None
    channel_total_sat: Optional[int] = None
    funding_txid: Optional[str] = None


class ListFunds(LightningModel):
    """Result of ``listfunds``."""

    outputs: List[FundOutput] = []
    channels: List[FundChannel] = []


class Invoice(LightningModel):
    """Result of ``invoice``."""

    payment_hash: str
    expires_at: int
    bolt11: str


class ListInvoice(LightningModel):
    """One entry of ``listinvoices``; also the result of ``delinvoice`` and ``waitinvoice``."""

    label: str
    payment_hash: str
    status: str
    expires_at: int
    bolt11: Optional[str] = None
    msatoshi: Optional[int] = None
    pay_index: Optional[int] = None
    msatoshi_received: Optional[int] = None
    paid_at: Optional[int] = None


class ListInvoices(LightningModel):
    """Result of ``listinvoices``."""

    invoices: List[ListInvoice]


class PayResponse(LightningModel):
    """Result of ``pay``."""

    payment_hash: str
    payment_preimage: str
    status: Optional[str] = None
    destination: Optional[str] = None
    msatoshi: Optional[int] = None
    msatoshi_sent: Optional[int] = None
    created_at: Optional[int] = None


class DecodePay(LightningModel):
    """Result of ``decodepay``."""

    currency: str
    created_at: int
    expiry: int
    payee: str
    payment_hash: str
    signature: str
    min_final_cltv_expiry: int
    msatoshi: Optional[int] = None
    description: Optional[str] = None
    description_hash: Optional[str] = None
    fallbacks: List[Dict[str, Any]] = []
    routes: List[Any] = []


class NewAddr(LightningModel):
    """Result of ``newaddr``."""

    address: str


class Connect(LightningModel):
    """Result of ``connect``."""

    id: str


class Close(LightningModel):
    """Result of ``close``."""

    tx: str
    txid: str
    type: Optional[str] = None


class Ping(LightningModel):
    """Result of ``ping``."""

    totlen: int


class HelpCommand(LightningModel):
    command: str
    description: str
    verbose: Optional[str] = None


class Help(LightningModel):
    """Result of ``help``."""

    help: List[HelpCommand]
