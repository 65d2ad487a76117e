"""Message-driven engine owning the locator, deploy-config and geometry cells."""

from __future__ import annotations

from dataclasses import replace
import logging
import time
from typing import Callable, Iterable, Sequence

from rocket_locator.config import DEFAULT_CONFIG, LocatorConfig
from rocket_locator.geometry.haversine import locator_vector
from rocket_locator.geometry.heading import device_heading_deg
from rocket_locator.models import (
    DeployConfig,
    FlightState,
    GeoPoint,
    GeometrySnapshot,
    LocatorVector,
)
from rocket_locator.protocol.classifier import MessageType, classify_message
from rocket_locator.protocol.prelaunch import decode_prelaunch
from rocket_locator.protocol.readers import Buffer, DecodeError
from rocket_locator.protocol.telemetry import decode_telemetry
from rocket_locator.runtime.state_cell import StateCell

logger = logging.getLogger(__name__)


class LocatorEngine:
    """Decode locator frames and track handheld geometry.

    Frames must be fed from a single source in arrival order. Readers observe
    ``flight_state``, ``deploy_config`` and ``geometry``, each of which only
    ever holds complete snapshots.
    """

    def __init__(
        self,
        config: LocatorConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.clock = clock
        self.flight_state: StateCell[FlightState] = StateCell(
            FlightState.initial(self.config.samples_per_second)
        )
        self.deploy_config: StateCell[DeployConfig] = StateCell(DeployConfig())
        self.geometry: StateCell[GeometrySnapshot] = StateCell(GeometrySnapshot())
        self.messages_decoded = 0
        self.messages_ignored = 0
        self.messages_dropped = 0

    def handle_message(self, message: Buffer) -> MessageType | None:
        """Decode one frame and publish the result.

        Returns the message type, or None when the header is foreign and the
        frame was ignored.

        Raises:
            DecodeError: the frame is malformed; nothing was published.
        """

        kind = classify_message(message, self.config)
        if kind is None:
            self.messages_ignored += 1
            logger.debug("Ignoring frame with unknown header %r", bytes(message[:3]))
            return None

        previous = self.flight_state.value
        received_at_s = float(self.clock())
        if kind is MessageType.PRELAUNCH:
            state, deploy = decode_prelaunch(message, previous, self.config)
            # deploy config first so flight_state subscribers see the matching pair
            self.deploy_config.set(deploy)
            self.flight_state.set(replace(state, last_message_time_s=received_at_s))
        else:
            state = decode_telemetry(message, previous, self.config)
            self.flight_state.set(replace(state, last_message_time_s=received_at_s))
        self.messages_decoded += 1
        return kind

    def consume(self, messages: Iterable[Buffer]) -> int:
        """Feed a stream of frames, dropping malformed ones; returns frames decoded."""

        decoded = 0
        for message in messages:
            try:
                kind = self.handle_message(message)
            except DecodeError as exc:
                self.messages_dropped += 1
                logger.warning("Dropped locator frame: %s", exc)
                continue
            if kind is not None:
                decoded += 1
        return decoded

    def update_heading(self, gravity: Sequence[float], geomagnetic: Sequence[float]) -> GeometrySnapshot:
        """Recompute the handheld heading, shifting the old one into ``last_heading_deg``."""

        heading = device_heading_deg(gravity, geomagnetic)
        return self.geometry.update(
            lambda snap: replace(snap, last_heading_deg=snap.heading_deg, heading_deg=heading)
        )

    def update_locator_vector(self, observer: GeoPoint, locator: GeoPoint) -> LocatorVector:
        """Recompute bearing and distance from ``observer`` to ``locator``."""

        vector = locator_vector(observer, locator, self.config.earth_radius_m)
        self.geometry.update(
            lambda snap: replace(
                snap,
                bearing_to_locator_deg=vector.bearing_deg,
                distance_to_locator_m=vector.distance_m,
            )
        )
        return vector

    def update_locator_vector_to(self, observer: GeoPoint) -> LocatorVector:
        """Like ``update_locator_vector`` using the latest decoded locator fix."""

        state = self.flight_state.value
        return self.update_locator_vector(observer, GeoPoint(state.latitude_deg, state.longitude_deg))
