"""
ProjStoreLib - Editor state persistence

This module handles persistence of Pixelate editing sessions, either
embedded in a shareable URL or stored as a local JSON file.
"""

from PX_Libs.ProjStoreLib.state_store import (
    Mode,
    PersistableState,
    StateStore,
    deserialize_state,
    make_url,
    read_url_state,
    serialize_state,
    state_from_fields,
)

__all__ = [
    "Mode",
    "PersistableState",
    "StateStore",
    "deserialize_state",
    "make_url",
    "read_url_state",
    "serialize_state",
    "state_from_fields",
]
