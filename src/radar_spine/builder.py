# src/radar_spine/builder.py

"""
Fold normalized rows into the Radar model.

Ring policy: rings are matched exactly on the trimmed name as it appears in
the data ("Adopt" and "adopt" are two rings). Quadrants are grouped on the
lower-cased name and displayed capitalized ("tools" and "TOOLS" share the
"Tools" quadrant).
"""

from collections.abc import Iterable, Sequence

from radar_spine import messages
from radar_spine.core.errors import MalformedDataError
from radar_spine.logging import get_logger
from radar_spine.models import MAX_RINGS, Blip, NormalizedBlip, Quadrant, Radar, Ring

log = get_logger(__name__)


def distinct_rings(blips: Iterable[NormalizedBlip]) -> list[str]:
    """Ring names in first-occurrence order."""
    return list(dict.fromkeys(blip.ring for blip in blips))


def build_radar(
    blips: Sequence[NormalizedBlip],
    current_sheet_name: str,
    alternative_sheets: Sequence[str],
) -> Radar:
    """
    Build a Radar from sanitized rows.

    Raises MalformedDataError when more than MAX_RINGS distinct rings appear.
    The ring count is checked before any model object is created.
    """
    ring_names = distinct_rings(blips)
    if len(ring_names) > MAX_RINGS:
        raise MalformedDataError(messages.TOO_MANY_RINGS).with_context(rings=ring_names)

    rings = {name: Ring(name, order) for order, name in enumerate(ring_names)}

    quadrants: dict[str, Quadrant] = {}
    for row in blips:
        key = row.quadrant.lower()
        if key not in quadrants:
            quadrants[key] = Quadrant(row.quadrant.capitalize())
        quadrants[key].add(Blip(row.name, rings[row.ring], row.is_new, row.topic, row.description))

    radar = Radar(
        quadrants=tuple(quadrants.values()),
        rings=tuple(rings.values()),
        current_sheet_name=current_sheet_name,
        alternative_sheets=tuple(alternative_sheets),
    )
    log.debug(
        "radar.built",
        quadrants=len(radar.quadrants),
        rings=len(radar.rings),
        blips=radar.blip_count,
    )
    return radar


def display_title(title: str) -> str:
    """Strip a trailing .csv from a radar title."""
    if title.endswith(".csv"):
        return title[: -len(".csv")]
    return title
