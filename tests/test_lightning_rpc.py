"""Tests for the high-level lightningd interface."""
import pytest

from lightningrpc.config import ClientConfig
from lightningrpc.lightning_rpc import LightningRPC
from lightningrpc.responses import GetInfo, ListInvoice, PayResponse
from lightningrpc.utils.errors import DecodeError, RpcError

NODE_ID = "02" + "ab" * 32

RESULTS = {
    "getinfo": {
        "id": NODE_ID,
        "alias": "SLEEPYMONKEY",
        "address": [{"type": "ipv4", "address": "10.0.0.1", "port": 9735}],
        "binding": [],
        "version": "v0.6.1",
        "blockheight": 1400000,
        "network": "testnet",
        "fees_collected_msat": 0,
    },
    "listpeers": {
        "peers": [
            {
                "id": NODE_ID,
                "connected": True,
                "netaddr": ["10.0.0.1:9735"],
                "channels": [{"state": "CHANNELD_NORMAL", "short_channel_id": "1x2x3"}],
            }
        ]
    },
    "listfunds": {
        "outputs": [{"txid": "aa" * 32, "output": 1, "value": 100000, "status": "confirmed"}],
        "channels": [],
    },
    "invoice": {"payment_hash": "cc" * 32, "expires_at": 1600000000, "bolt11": "lntb1..."},
    "delinvoice": {
        "label": "coffee",
        "payment_hash": "cc" * 32,
        "status": "unpaid",
        "expires_at": 1600000000,
    },
    "pay": {
        "payment_hash": "cc" * 32,
        "payment_preimage": "dd" * 32,
        "status": "complete",
        "msatoshi": 1000,
        "msatoshi_sent": 1001,
    },
    "newaddr": {"address": "tb1qexample"},
    "help": {"help": [{"command": "getinfo", "description": "Show information about this node"}]},
    "stop": "Shutting down",
}


@pytest.fixture
def rpc(fake_daemon):
    """LightningRPC talking to a fake daemon answering from RESULTS."""

    def handler(request):
        method = request["method"]
        if method not in RESULTS:
            return {
                "error": {"code": -32601, "message": f"Unknown command '{method}'"},
                "id": request["id"],
                "jsonrpc": "2.0",
            }
        return {"result": RESULTS[method], "id": request["id"], "jsonrpc": "2.0"}

    fake_daemon.handler = handler
    with LightningRPC(fake_daemon.path, timeout=5) as r:
        yield r


def test_getinfo(rpc, fake_daemon):
    """Test getinfo decodes into a model and keeps unknown fields."""
    info = rpc.getinfo()

    assert isinstance(info, GetInfo)
    assert info.id == NODE_ID
    assert info.blockheight == 1400000
    assert info.address[0].port == 9735
    assert info.fees_collected_msat == 0
    assert fake_daemon.requests[0]["method"] == "getinfo"
    assert fake_daemon.requests[0]["params"] == {}


def test_listpeers_params(rpc, fake_daemon):
    """Test optional arguments are only sent when given."""
    rpc.listpeers()
    peers = rpc.listpeers(id=NODE_ID)

    assert fake_daemon.requests[0]["params"] == {}
    assert fake_daemon.requests[1]["params"] == {"id": NODE_ID}
    assert peers.peers[0].channels[0].short_channel_id == "1x2x3"


def test_listfunds(rpc):
    """Test listfunds decodes outputs."""
    funds = rpc.listfunds()

    assert funds.outputs[0].value == 100000
    assert funds.channels == []


def test_invoice(rpc, fake_daemon):
    """Test invoice sends its arguments by name."""
    invoice = rpc.invoice(1000, "coffee", "one coffee", expiry=3600)

    assert invoice.bolt11 == "lntb1..."
    assert fake_daemon.requests[0]["params"] == {
        "msatoshi": 1000,
        "label": "coffee",
        "description": "one coffee",
        "expiry": 3600,
    }


def test_delinvoice(rpc):
    """Test delinvoice returns the deleted invoice."""
    deleted = rpc.delinvoice("coffee", "unpaid")

    assert isinstance(deleted, ListInvoice)
    assert deleted.status == "unpaid"


def test_pay(rpc, fake_daemon):
    """Test pay decodes the payment result."""
    payment = rpc.pay("lntb1...", riskfactor=10)

    assert isinstance(payment, PayResponse)
    assert payment.payment_preimage == "dd" * 32
    assert fake_daemon.requests[0]["params"] == {"bolt11": "lntb1...", "riskfactor": 10}


def test_newaddr_and_help(rpc):
    """Test simple result models."""
    assert rpc.newaddr("bech32").address == "tb1qexample"
    assert rpc.help().help[0].command == "getinfo"


def test_stop(rpc):
    """Test stop returns the daemon's message."""
    assert rpc.stop() == "Shutting down"


def test_unknown_command(rpc):
    """Test a daemon error reaches the caller unchanged."""
    with pytest.raises(RpcError) as exc_info:
        rpc.listnodes()

    assert exc_info.value.code == -32601
    assert "listnodes" in exc_info.value.message


def test_result_shape_mismatch(rpc, monkeypatch):
    """Test a result missing required fields raises DecodeError."""
    monkeypatch.setitem(RESULTS, "newaddr", {"bech32": "tb1qexample"})

    with pytest.raises(DecodeError):
        rpc.newaddr()


def test_from_config():
    """Test the API can be built from a config."""
    config = ClientConfig(socket_path="/tmp/lightning-rpc", timeout=12)

    rpc = LightningRPC.from_config(config)

    assert rpc.client.socket_path == "/tmp/lightning-rpc"
    assert rpc.client.timeout == 12
