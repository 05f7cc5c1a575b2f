"""
Platformio bid adapter.

Translates a publisher's multi-slot ad request into an OpenRTB request
for the Platformio exchange and maps the exchange's bids back onto the
publisher's slots.
"""

from .adapter import ADAPTER_NAME, FAMILY_NAME, PlatformioAdapter
from .config import AdapterConfig, load_adapter_config
from .errors import (
    AdapterError,
    DeadlineExceededError,
    DecodeError,
    InvalidFieldError,
    InvalidParamsError,
    MissingFieldError,
    NoValidImpressionsError,
    ParamError,
    TransportError,
)
from .models import (
    AdapterBidder,
    AdapterRequest,
    DictUserSyncStore,
    Format,
    OutputBid,
    SlotRequest,
)
from .usersync import UsersyncInfo

__version__ = '1.0.0'

__all__ = [
    'ADAPTER_NAME',
    'FAMILY_NAME',
    'PlatformioAdapter',
    'AdapterConfig',
    'load_adapter_config',
    'AdapterError',
    'ParamError',
    'MissingFieldError',
    'InvalidFieldError',
    'InvalidParamsError',
    'NoValidImpressionsError',
    'TransportError',
    'DeadlineExceededError',
    'DecodeError',
    'AdapterBidder',
    'AdapterRequest',
    'DictUserSyncStore',
    'Format',
    'OutputBid',
    'SlotRequest',
    'UsersyncInfo',
]
