"""Mirror capability updates onto a device's capability store."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol

from .exceptions import CapabilityWriteError
from .models import CapabilityUpdate

_LOGGER = logging.getLogger(__name__)


class CapabilityStore(Protocol):
    """Host-side registry of capabilities and their last written values."""

    def has_capability(self, capability_id: str) -> bool:
        ...

    async def async_add_capability(self, capability_id: str) -> None:
        ...

    def get_value(self, capability_id: str) -> Any:
        ...

    async def async_set_value(self, capability_id: str, value: Any) -> None:
        ...

    def snapshot(self) -> Dict[str, Any]:
        ...


class MemoryCapabilityStore:
    """Dict backed capability store.

    Listeners registered with ``add_capability_listener`` are called with
    the capability id whenever a new capability is added.
    """

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})
        self._listeners: List[Callable[[str], None]] = []

    def add_capability_listener(self, listener: Callable[[str], None]) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def remove_listener() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove_listener

    @property
    def capabilities(self) -> List[str]:
        return list(self._values)

    def has_capability(self, capability_id: str) -> bool:
        return capability_id in self._values

    async def async_add_capability(self, capability_id: str) -> None:
        if capability_id in self._values:
            return
        self._values[capability_id] = None
        for listener in list(self._listeners):
            listener(capability_id)

    def get_value(self, capability_id: str) -> Any:
        return self._values.get(capability_id)

    async def async_set_value(self, capability_id: str, value: Any) -> None:
        if capability_id not in self._values:
            raise KeyError(f"Unknown capability {capability_id}")
        self._values[capability_id] = value

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._values)


class CapabilitySynchronizer:
    """Write changed capability values to a store."""

    def __init__(self, store: CapabilityStore):
        self._store = store

    @property
    def store(self) -> CapabilityStore:
        return self._store

    async def async_sync(
        self,
        updates: Iterable[CapabilityUpdate],
        current_state: Optional[Dict[str, Any]] = None,
    ) -> List[CapabilityUpdate]:
        """Apply updates and return the ones that were written.

        A failure on one capability is logged and does not stop the rest.
        """
        if current_state is None:
            current_state = self._store.snapshot()

        applied: List[CapabilityUpdate] = []
        seen = set()

        for update in updates:
            capability_id = update.capability_id
            if capability_id in seen:
                _LOGGER.debug("Ignoring repeated update for %s", capability_id)
                continue
            seen.add(capability_id)

            try:
                written = await self._async_apply(update, current_state)
            except CapabilityWriteError as err:
                _LOGGER.error("Error updating capability %s: %s", err.capability_id, err)
                continue

            if written:
                applied.append(update)

        return applied

    async def _async_apply(
        self, update: CapabilityUpdate, current_state: Dict[str, Any]
    ) -> bool:
        capability_id, value = update.capability_id, update.value

        if not self._store.has_capability(capability_id):
            try:
                await self._store.async_add_capability(capability_id)
            except Exception as err:
                raise CapabilityWriteError(
                    capability_id, f"could not add capability: {err}"
                ) from err

        if value is None or current_state.get(capability_id) == value:
            return False

        try:
            await self._store.async_set_value(capability_id, value)
        except Exception as err:
            raise CapabilityWriteError(
                capability_id, f"could not set value {value!r}: {err}"
            ) from err

        _LOGGER.debug("Update capability: %s with value %s", capability_id, value)
        return True
