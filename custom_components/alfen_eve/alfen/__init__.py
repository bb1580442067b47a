"""
Alfen Eve local API client (embedded module).
"""

# Re-export the poller and the pieces it is built from
from .api_client import AlfenApiClient
from .exceptions import AlfenError, AuthError, CapabilityWriteError, RequestError
from .logger import SmartLogger
from .mapper import map_properties, transform_value
from .models import CapabilityUpdate, DeviceSettings, JsonBody, PropertyRecord, TextBody
from .poller import AlfenPoller, PollResult, PollScheduler, PollState
from .sync import CapabilityStore, CapabilitySynchronizer, MemoryCapabilityStore
