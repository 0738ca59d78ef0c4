"""Roster index: participant id -> participant attributes.

Built once from the squad feed and read-only afterwards. Both the scoring
engine (positions, for narrative rules) and the story builder (names, for
headlines) look players up here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

UNDEFINED_PLAYER = "undefined player"


class PersonType(str, Enum):
    PLAYER = "player"
    COACH = "coach"
    ASSISTANT_COACH = "assistant coach"


class Position(str, Enum):
    GOALKEEPER = "Goalkeeper"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    ATTACKER = "Attacker"


@dataclass(frozen=True)
class Participant:
    """A squad member as seen by the scoring rules."""

    id: str
    name: str
    person_type: str
    position: Position | None = None
    shirt_number: int | None = None
    team_id: str | None = None


RosterIndex = Mapping[str, Participant]


def _display_name(person: Mapping[str, Any]) -> str:
    for key in ("knownName", "matchName"):
        value = person.get(key)
        if value:
            return str(value)
    full = " ".join(
        str(part) for part in (person.get("firstName"), person.get("lastName")) if part
    )
    return full or UNDEFINED_PLAYER


def _position(raw: Any) -> Position | None:
    if not raw:
        return None
    try:
        return Position(str(raw))
    except ValueError:
        return None


def _shirt_number(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def participant_from_dict(person: Mapping[str, Any], team_id: str | None = None) -> Participant:
    return Participant(
        id=str(person["id"]),
        name=_display_name(person),
        person_type=str(person.get("type") or PersonType.PLAYER.value),
        position=_position(person.get("position")),
        shirt_number=_shirt_number(person.get("shirtNumber")),
        team_id=team_id,
    )


def build_roster_index(squad_feed: Mapping[str, Any]) -> RosterIndex:
    """Index every person in every squad by id.

    People without an id are skipped. A later duplicate id overwrites an
    earlier one.
    """
    index: dict[str, Participant] = {}
    for squad in squad_feed.get("squad") or []:
        team_id = squad.get("contestantId")
        for person in squad.get("person") or []:
            if not person.get("id"):
                continue
            participant = participant_from_dict(person, team_id=team_id)
            index[participant.id] = participant

    logger.info("roster_indexed", extra={"participants": len(index)})
    return MappingProxyType(index)


def display_name(roster: RosterIndex, player_id: str | None) -> str:
    """Participant name for generated text, or "undefined player"."""
    if not player_id:
        return UNDEFINED_PLAYER
    participant = roster.get(player_id)
    if participant is None:
        return UNDEFINED_PLAYER
    return participant.name
