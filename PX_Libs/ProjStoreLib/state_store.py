"""
Persistable editor state for Pixelate.

The state of an editing session (the image as a PNG data URL, the view mode,
the active color and the assembly progress) can be stored two ways:

- as a URL query string, e.g. in the fragment of a shareable link
- as a JSON file in a local directory

Both readers validate field by field and drop anything malformed instead of
raising, so a damaged link or file degrades to defaults.

Functions:
    serialize_state: Encode a state as a URL query string
    deserialize_state: Decode the valid fields of a URL query string
    make_url: Embed a state in the fragment of a URL
    read_url_state: Decode the state embedded in a URL's fragment
    state_from_fields: Fill a partial field mapping with defaults

Classes:
    Mode: Editor modes
    PersistableState: Everything needed to restore a session
    StateStore: JSON file backed storage
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from PX_Libs.constants import (
    DEFAULT_ACTIVE_COLOR,
    FIELD_ACTIVE_COLOR,
    FIELD_CROSSED_COLORS,
    FIELD_CROSSED_COLUMNS,
    FIELD_CROSSED_ROWS,
    FIELD_IMAGE,
    FIELD_MODE,
    PNG_DATA_URL_PREFIX,
    QUERY_KEY_ACTIVE_COLOR,
    QUERY_KEY_CROSSED_COLORS,
    QUERY_KEY_CROSSED_COLUMNS,
    QUERY_KEY_CROSSED_ROWS,
    QUERY_KEY_IMAGE,
    QUERY_KEY_MODE,
    QUERY_LIST_SEPARATOR,
    STATE_FILE_NAME,
)
from PX_Libs.ImageEditingLib.color_codec import is_hex_color, normalize_color

logger = logging.getLogger(__name__)


class Mode(Enum):
    NEW = "new"
    PREPROCESS = "preprocess"
    DRAW = "d"
    ASSEMBLE = "a"


PERSISTED_MODES = (Mode.DRAW, Mode.ASSEMBLE)


@dataclass
class PersistableState:
    image: str
    mode: Mode = Mode.DRAW
    active_color: str = DEFAULT_ACTIVE_COLOR
    crossed_colors: List[str] = field(default_factory=list)
    crossed_rows: List[int] = field(default_factory=list)
    crossed_columns: List[int] = field(default_factory=list)


def _valid_image(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.startswith(PNG_DATA_URL_PREFIX):
        return value
    return None


def _valid_mode(value: Any) -> Optional[Mode]:
    for mode in PERSISTED_MODES:
        if mode.value == value:
            return mode
    return None


def _valid_colors(values: Iterable[Any]) -> List[str]:
    return [normalize_color(value) for value in values if isinstance(value, str) and is_hex_color(value)]


def _valid_indices(values: Iterable[Any]) -> List[int]:
    indices: List[int] = []
    for value in values:
        try:
            index = int(value)
        except (TypeError, ValueError):
            continue
        if index >= 0:
            indices.append(index)
    return indices


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part for part in value.split(QUERY_LIST_SEPARATOR) if part]


def serialize_state(state: PersistableState) -> str:
    return urlencode({
        QUERY_KEY_ACTIVE_COLOR: state.active_color,
        QUERY_KEY_IMAGE: state.image,
        QUERY_KEY_CROSSED_COLORS: QUERY_LIST_SEPARATOR.join(state.crossed_colors),
        QUERY_KEY_CROSSED_COLUMNS: QUERY_LIST_SEPARATOR.join(str(c) for c in state.crossed_columns),
        QUERY_KEY_CROSSED_ROWS: QUERY_LIST_SEPARATOR.join(str(r) for r in state.crossed_rows),
        QUERY_KEY_MODE: state.mode.value,
    })


def deserialize_state(text: str) -> Dict[str, Any]:
    """
    Decode the valid fields of a URL query string.

    Args:
        text: Query string, with or without a leading '?' or '#'

    Returns:
        Mapping of PersistableState field names to values. Missing or
        malformed fields are left out.
    """
    params = {key: values[0] for key, values in parse_qs(text.lstrip("?#")).items() if values}
    fields: Dict[str, Any] = {}

    image = _valid_image(params.get(QUERY_KEY_IMAGE))
    if image is not None:
        fields[FIELD_IMAGE] = image
    elif QUERY_KEY_IMAGE in params:
        logger.warning("Ignoring image parameter without a PNG data URL prefix")

    active_color = params.get(QUERY_KEY_ACTIVE_COLOR)
    if active_color and is_hex_color(active_color):
        fields[FIELD_ACTIVE_COLOR] = normalize_color(active_color)

    crossed_colors = _valid_colors(_split(params.get(QUERY_KEY_CROSSED_COLORS)))
    if crossed_colors:
        fields[FIELD_CROSSED_COLORS] = crossed_colors

    crossed_rows = _valid_indices(_split(params.get(QUERY_KEY_CROSSED_ROWS)))
    if crossed_rows:
        fields[FIELD_CROSSED_ROWS] = crossed_rows

    crossed_columns = _valid_indices(_split(params.get(QUERY_KEY_CROSSED_COLUMNS)))
    if crossed_columns:
        fields[FIELD_CROSSED_COLUMNS] = crossed_columns

    mode = _valid_mode(params.get(QUERY_KEY_MODE))
    if mode is not None:
        fields[FIELD_MODE] = mode

    return fields


def make_url(state: PersistableState, base_url: str) -> str:
    parts = urlsplit(base_url)
    return urlunsplit(parts._replace(fragment=serialize_state(state)))


def read_url_state(url: str) -> Dict[str, Any]:
    return deserialize_state(urlsplit(url).fragment)


def state_from_fields(fields: Dict[str, Any]) -> Optional[PersistableState]:
    """
    Build a full state from validated fields, or None without an image.
    """
    image = fields.get(FIELD_IMAGE)
    if not image:
        return None
    return PersistableState(
        image=image,
        mode=fields.get(FIELD_MODE, Mode.DRAW),
        active_color=fields.get(FIELD_ACTIVE_COLOR, DEFAULT_ACTIVE_COLOR),
        crossed_colors=list(fields.get(FIELD_CROSSED_COLORS, [])),
        crossed_rows=list(fields.get(FIELD_CROSSED_ROWS, [])),
        crossed_columns=list(fields.get(FIELD_CROSSED_COLUMNS, [])),
    )


class StateStore:
    """
    Stores one PersistableState as JSON in a directory.

    Args:
        base_dir: Directory holding the state file; created on first save
    """

    def __init__(self, base_dir: Path) -> None:
        self.path = base_dir / STATE_FILE_NAME

    def save(self, state: PersistableState) -> None:
        payload = asdict(state)
        payload[FIELD_MODE] = state.mode.value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info(f"Saved editor state to {self.path}")

    def read(self) -> Dict[str, Any]:
        """
        Load the valid fields of the stored state.

        Returns:
            Mapping of field names to values; empty if nothing usable is stored
        """
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning(f"Ignoring unreadable state file {self.path}: {exc}")
            return {}

        if not isinstance(payload, dict):
            return {}

        fields: Dict[str, Any] = {}
        image = _valid_image(payload.get(FIELD_IMAGE))
        if image is not None:
            fields[FIELD_IMAGE] = image

        active_color = payload.get(FIELD_ACTIVE_COLOR)
        if isinstance(active_color, str) and is_hex_color(active_color):
            fields[FIELD_ACTIVE_COLOR] = normalize_color(active_color)

        mode = _valid_mode(payload.get(FIELD_MODE))
        if mode is not None:
            fields[FIELD_MODE] = mode

        for name, validate in (
            (FIELD_CROSSED_COLORS, _valid_colors),
            (FIELD_CROSSED_ROWS, _valid_indices),
            (FIELD_CROSSED_COLUMNS, _valid_indices),
        ):
            values = payload.get(name)
            if isinstance(values, list):
                fields[name] = validate(values)

        return fields

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
