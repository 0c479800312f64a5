from __future__ import annotations

import logging
from dataclasses import dataclass

from lumos import settings, state
from lumos.errors import NotSupportedError
from lumos.store import SETTINGS_KEY, STATE_KEY, BlobStore

log = logging.getLogger(__name__)


@dataclass
class NightLight:
    """Control Windows night light through its two stored blobs.

    Every call re-reads the store and writes back a whole blob. There is no
    locking: a concurrent writer between our read and write loses its update.
    """

    store: BlobStore

    def _read(self, key: str) -> bytes:
        try:
            return self.store.read(key)
        except OSError as e:
            raise NotSupportedError(f"night light {key} blob unavailable: {e}") from e

    def _read_state(self) -> state.StateBlob:
        return state.decode(self._read(STATE_KEY))

    def _read_settings(self) -> settings.SettingsBlob:
        return settings.decode(self._read(SETTINGS_KEY))

    def supported(self) -> bool:
        try:
            self._read(STATE_KEY)
        except NotSupportedError:
            return False
        return True

    def enabled(self) -> bool:
        return state.is_enabled(self._read_state())

    def _write_toggled(self, blob: state.StateBlob) -> None:
        new = state.toggle(blob)
        self.store.write(STATE_KEY, state.encode(new))
        log.info("night light %s", "enabled" if state.is_enabled(new) else "disabled")

    def enable(self) -> None:
        blob = self._read_state()
        if not state.is_enabled(blob):
            self._write_toggled(blob)

    def disable(self) -> None:
        blob = self._read_state()
        if state.is_enabled(blob):
            self._write_toggled(blob)

    def toggle(self) -> None:
        self._write_toggled(self._read_state())

    def get_strength(self) -> float:
        kelvin = settings.kelvin_of(self._read_settings())
        return settings.clamp_percentage(settings.percentage_of(kelvin))

    def set_strength(self, percentage: float) -> None:
        """Store a new strength (0-100, clamped). Enablement is not touched.

        Windows does not pick up a settings write while night light is on.
        To make the change visible, follow up with a disable, a short pause and
        an enable; see lumos.policy.apply_strength.
        """

        new = settings.with_strength(self._read_settings(), percentage)
        self.store.write(SETTINGS_KEY, settings.encode(new))
        log.info("night light strength set to %.1f%%", settings.clamp_percentage(percentage))

    def dump(self) -> dict[str, bytes]:
        return {key: self._read(key) for key in (STATE_KEY, SETTINGS_KEY)}
