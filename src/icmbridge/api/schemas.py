"""Request bodies for the bridge API.

All fields are optional and amounts accept strings or numbers; routes do
the validation and pick the error message. JSON keys are camelCase.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

# Booleans stay booleans so amount parsing can reject them
AmountValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]
WeiValue = Union[StrictBool, StrictInt, StrictStr]


class CamelModel(BaseModel):
    """Base model accepting camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LockRequest(CamelModel):
    """Lock tokens on this chain and bridge them out."""

    destination_chain: Optional[str] = Field(None, description="Destination chain identifier")
    amount: Optional[AmountValue] = Field(None, description="Amount in ether units")
    token_address: Optional[str] = Field(None, description="Token contract address")
    user_address: Optional[str] = Field(None, description="Requesting user (informational)")


class BurnRequest(CamelModel):
    """Burn wrapped tokens to release them on their source chain."""

    source_chain: Optional[str] = Field(None, description="Source chain identifier")
    amount: Optional[AmountValue] = Field(None, description="Amount in ether units")
    token_address: Optional[str] = Field(None, description="Token contract address")


class WhitelistTokenRequest(CamelModel):
    token_address: Optional[str] = None
    is_native: bool = False
    counterpart_token: Optional[str] = None
    min_amount: Optional[WeiValue] = Field(None, description="Minimum amount in wei")
    max_amount: Optional[WeiValue] = Field(None, description="Maximum amount in wei")


class TokenRequest(CamelModel):
    token_address: Optional[str] = None


class EnableChainRequest(CamelModel):
    chain_id: Optional[str] = None
    bridge_address: Optional[str] = None


class ChainRequest(CamelModel):
    chain_id: Optional[str] = None


class SetFeeRequest(CamelModel):
    fee: Optional[AmountValue] = Field(None, description="New bridge fee in ether units")


class SetFeeRecipientRequest(CamelModel):
    recipient: Optional[str] = None


class EmergencyWithdrawRequest(CamelModel):
    token_address: Optional[str] = None
    amount: Optional[WeiValue] = Field(None, description="Amount in wei")
