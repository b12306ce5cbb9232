"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Event Naming Convention:
    <component>.<category>.<action>

    component: session, sample, region, location, replay, config, error
    category: authorization, accuracy, updates
    action: started, changed, loaded

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.sequence_number
    | filter event = "sample.recorded"
    | stats count() by bin(5m)
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - session.*: Session lifecycle
    - sample.*, region.*: Per-sample core updates (DEBUG level)
    - location.*: Location source interactions
    - replay.*, config.*: Input loading
    - error.*: Error conditions
    """

    # ========== Session Events ==========
    SESSION_STARTED = "session.started"
    """Session asked the source for authorization and updates."""

    SESSION_STOPPED = "session.stopped"
    """Session stopped receiving location updates."""

    # ========== Core Events ==========
    SAMPLE_RECORDED = "sample.recorded"
    """Sample recorded by the aggregator."""

    REGION_UPDATED = "region.updated"
    """Display region derived for the current sample."""

    # ========== Location Source Events ==========
    LOCATION_UPDATES_STARTED = "location.updates.started"
    """Source started delivering location updates."""

    LOCATION_BATCH_RECEIVED = "location.batch.received"
    """Source delivered a batch of fixes."""

    AUTHORIZATION_CHANGED = "location.authorization.changed"
    """Authorization status reported by the source changed."""

    ACCURACY_MODE_CHANGED = "location.accuracy.changed"
    """Desired accuracy switched between BEST and BEST_FOR_NAVIGATION."""

    # ========== Input Events ==========
    REPLAY_LOADED = "replay.loaded"
    """Recorded track loaded for replay."""

    REPLAY_FINISHED = "replay.finished"
    """All recorded batches delivered."""

    CONFIG_LOADED = "config.loaded"
    """Session configuration loaded and validated."""

    # ========== Error Events ==========
    LOCATION_SERVICES_ERROR = "error.location_services"
    """Location services are disabled on the device."""

    AUTHORIZATION_ERROR = "error.authorization"
    """Not authorized to receive location updates."""

    REPLAY_PARSE_ERROR = "error.replay_parse"
    """Recorded track could not be parsed."""

    CONFIG_ERROR = "error.config"
    """Configuration failed validation."""
