"""ABI of the ICM bridge contract.

Only the interface is known here; the contract itself is deployed and
maintained separately.
"""

DEFAULT_CONTRACT_ADDRESS = "0x68F7B6b2c9776F97Ff08584d79fBf2296a3C5328"


def _inputs(*params: tuple) -> list[dict]:
    """Build an ABI input list from (name, type[, indexed]) tuples."""
    result = []
    for param in params:
        entry = {"name": param[0], "type": param[1], "internalType": param[1]}
        if len(param) > 2:
            entry["indexed"] = param[2]
        result.append(entry)
    return result


def _view(name: str, inputs: list[dict], outputs: list[dict]) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": inputs,
        "outputs": outputs,
    }


def _tx(name: str, inputs: list[dict], payable: bool = False) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "payable" if payable else "nonpayable",
        "inputs": inputs,
        "outputs": [],
    }


def _event(name: str, inputs: list[dict]) -> dict:
    return {"type": "event", "name": name, "anonymous": False, "inputs": inputs}


PENDING_TRANSACTION_COMPONENTS = _inputs(
    ("user", "address"),
    ("amount", "uint256"),
    ("destinationChain", "bytes32"),
    ("timestamp", "uint256"),
    ("completed", "bool"),
    ("token", "address"),
    ("messageType", "string"),
)

TOKEN_CONFIG_COMPONENTS = _inputs(
    ("isWhitelisted", "bool"),
    ("isNative", "bool"),
    ("counterpartToken", "address"),
    ("minBridgeAmount", "uint256"),
    ("maxBridgeAmount", "uint256"),
)

BRIDGE_ABI: list[dict] = [
    # View functions
    _view(
        "getPendingTransaction",
        _inputs(("txId", "bytes32")),
        [{"name": "", "type": "tuple", "components": PENDING_TRANSACTION_COMPONENTS}],
    ),
    _view("isMessageProcessed", _inputs(("messageHash", "bytes32")), _inputs(("", "bool"))),
    _view("getLockedBalance", _inputs(("token", "address")), _inputs(("", "uint256"))),
    _view("getMintedBalance", _inputs(("token", "address")), _inputs(("", "uint256"))),
    _view(
        "getTokenConfig",
        _inputs(("token", "address")),
        [{"name": "", "type": "tuple", "components": TOKEN_CONFIG_COMPONENTS}],
    ),
    _view("isChainEnabled", _inputs(("chainId", "bytes32")), _inputs(("", "bool"))),
    _view("bridgeFee", [], _inputs(("", "uint256"))),
    _view("totalFeesCollected", [], _inputs(("", "uint256"))),
    _view("feeRecipient", [], _inputs(("", "address"))),
    _view("userNonces", _inputs(("user", "address")), _inputs(("", "uint256"))),
    _view("CHAIN_ID", [], _inputs(("", "bytes32"))),
    _view("owner", [], _inputs(("", "address"))),
    _view("paused", [], _inputs(("", "bool"))),
    # Bridge functions
    _tx(
        "lockAndBridge",
        _inputs(("destinationChain", "bytes32"), ("amount", "uint256"), ("token", "address")),
        payable=True,
    ),
    _tx(
        "burnAndBridge",
        _inputs(("sourceChain", "bytes32"), ("amount", "uint256"), ("token", "address")),
        payable=True,
    ),
    # Admin functions
    _tx(
        "whitelistToken",
        _inputs(
            ("token", "address"),
            ("isNative", "bool"),
            ("counterpartToken", "address"),
            ("minAmount", "uint256"),
            ("maxAmount", "uint256"),
        ),
    ),
    _tx("blacklistToken", _inputs(("token", "address"))),
    _tx("enableChain", _inputs(("chainId", "bytes32"), ("bridgeAddress", "address"))),
    _tx("disableChain", _inputs(("chainId", "bytes32"))),
    _tx("setBridgeFee", _inputs(("newFee", "uint256"))),
    _tx("setFeeRecipient", _inputs(("newRecipient", "address"))),
    _tx("pause", []),
    _tx("unpause", []),
    _tx("withdrawFees", []),
    _tx("emergencyWithdraw", _inputs(("token", "address"), ("amount", "uint256"))),
    _tx("emergencyWithdrawETH", []),
    # Events
    _event(
        "TokensLocked",
        _inputs(
            ("user", "address", True),
            ("amount", "uint256", False),
            ("destinationChain", "bytes32", True),
            ("txId", "bytes32", True),
            ("token", "address", False),
        ),
    ),
    _event(
        "TokensMinted",
        _inputs(
            ("user", "address", True),
            ("amount", "uint256", False),
            ("sourceChain", "bytes32", True),
            ("txId", "bytes32", True),
            ("token", "address", False),
        ),
    ),
    _event(
        "TokensBurned",
        _inputs(
            ("user", "address", True),
            ("amount", "uint256", False),
            ("destinationChain", "bytes32", True),
            ("txId", "bytes32", True),
            ("token", "address", False),
        ),
    ),
    _event(
        "TokensUnlocked",
        _inputs(
            ("user", "address", True),
            ("amount", "uint256", False),
            ("sourceChain", "bytes32", True),
            ("txId", "bytes32", True),
            ("token", "address", False),
        ),
    ),
    _event(
        "ICMMessageSent",
        _inputs(
            ("destinationChain", "bytes32", True),
            ("messageId", "bytes32", True),
            ("messageType", "string", False),
        ),
    ),
    _event(
        "ICMMessageReceived",
        _inputs(
            ("sourceChain", "bytes32", True),
            ("messageId", "bytes32", True),
            ("messageType", "string", False),
        ),
    ),
]

TOKEN_EVENTS = ("TokensLocked", "TokensMinted", "TokensBurned", "TokensUnlocked")
MESSAGE_EVENTS = ("ICMMessageSent", "ICMMessageReceived")
BRIDGE_EVENTS = TOKEN_EVENTS + MESSAGE_EVENTS
