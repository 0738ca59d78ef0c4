"""pytest configuration and fixtures."""

import os

# Set environment defaults before any storypack imports read settings
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("HIGHLIGHT_COUNT", "10")

import pytest  # noqa: E402

HOME_ID = "t-home"
AWAY_ID = "t-away"


def _person(pid, first, last, position=None, person_type="player", known=None):
    person = {
        "id": pid,
        "firstName": first,
        "lastName": last,
        "matchName": f"{first[0]}. {last}",
        "type": person_type,
        "active": "yes",
    }
    if position:
        person["position"] = position
    if known:
        person["knownName"] = known
    return person


@pytest.fixture
def squad_feed() -> dict:
    return {
        "lastUpdated": "2026-10-18T09:00:00Z",
        "squad": [
            {
                "contestantId": HOME_ID,
                "contestantName": "Celtic",
                "person": [
                    _person("p-keeper", "Kasper", "Schmeichel", "Goalkeeper"),
                    _person("p-def", "Cameron", "Carter-Vickers", "Defender"),
                    _person("p-mid", "Callum", "McGregor", "Midfielder"),
                    _person("p-att", "Kyogo", "Furuhashi", "Attacker", known="Kyogo"),
                    _person("p-sub", "Adam", "Idah", "Attacker"),
                    _person("c-home", "Brendan", "Rodgers", person_type="coach"),
                ],
            },
            {
                "contestantId": AWAY_ID,
                "contestantName": "Kilmarnock",
                "person": [
                    _person("a-keeper", "Robby", "McCrorie", "Goalkeeper"),
                    _person("a-att", "Kyle", "Vassell", "Attacker"),
                    {"firstName": "No", "lastName": "Identifier", "type": "player"},
                ],
            },
        ],
    }


def _message(mid, event_type, timestamp, minute=None, team=None, player=None, player2=None, comment=""):
    raw = {
        "id": mid,
        "type": event_type,
        "comment": comment,
        "timestamp": timestamp,
        "lastModified": timestamp,
    }
    if minute is not None:
        raw.update({"minute": str(minute), "period": "1" if minute <= 45 else "2", "second": "0", "time": f"{minute}'"})
    if team:
        raw["teamRef1"] = team
    if player:
        raw["playerRef1"] = player
    if player2:
        raw["playerRef2"] = player2
    return raw


@pytest.fixture
def match_feed() -> dict:
    """A small match: lineups, a corner-led opener, a late away equaliser."""
    return {
        "matchInfo": {
            "id": "match-1",
            "description": "Celtic vs Kilmarnock",
            "contestant": [
                {"id": HOME_ID, "name": "Celtic", "shortName": "Celtic", "position": "home"},
                {"id": AWAY_ID, "name": "Kilmarnock", "shortName": "Killie", "position": "away"},
            ],
        },
        "messages": [
            {
                "language": "en",
                "message": [
                    # Feed blocks are newest-first; extraction re-sorts them
                    _message("e9", "end 14", "2026-10-18T16:55:00Z", minute=94, comment="Full time."),
                    _message("e8", "goal", "2026-10-18T16:45:00Z", minute=85, team=AWAY_ID, player="a-att",
                             comment="Goal! Kyle Vassell levels it late on."),
                    _message("e7", "yellow card", "2026-10-18T16:20:00Z", minute=60, team=HOME_ID, player="p-keeper",
                             comment="Kasper Schmeichel is booked for time wasting."),
                    _message("e6", "substitution", "2026-10-18T16:10:00Z", minute=55, team=HOME_ID, player="p-att",
                             player2="p-sub", comment="Substitution, Celtic. Adam Idah replaces Kyogo."),
                    _message("e5", "goal", "2026-10-18T15:28:00Z", minute=43, team=HOME_ID, player="p-def",
                             comment="Goal! Cameron Carter-Vickers heads home from the corner."),
                    _message("e4", "corner", "2026-10-18T15:27:00Z", minute=42, team=HOME_ID, player="p-mid",
                             comment="Corner, Celtic. Conceded by Robby McCrorie."),
                    _message("e3", "miss", "2026-10-18T15:10:00Z", minute=25, team=AWAY_ID, player="a-att",
                             comment="Attempt missed. Kyle Vassell shoots wide."),
                    _message("e2", "start", "2026-10-18T14:45:00Z", comment="First half begins."),
                ],
            },
            {
                "language": "en",
                "message": [
                    _message("e1", "lineup", "2026-10-18T14:00:00Z",
                             comment="Lineups are announced and players are warming up."),
                ],
            },
        ],
    }


@pytest.fixture
def weights() -> dict:
    return {
        "baseScores": {
            "default": 10,
            "lineup": 0,
            "goal": 100,
            "penalty goal": 90,
            "yellow card": 30,
            "corner": 10,
            "substitution": 10,
            "miss": 20,
        },
        "multipliers": {
            "lateGame": 1.5,
            "halftimePush": 1.2,
            "tieBreaker": 1.5,
            "equalizer": 1.4,
            "garbageTime": 0.5,
            "superSub": 1.3,
            "disallowedGoal": 0.3,
        },
        "bonuses": {
            "defenderGoal": 25,
            "keeperDrama": 20,
            "assistSequence": 15,
            "redCardText": 50,
        },
        "thresholds": {
            "lateGameMinute": 80,
            "superSubMinutes": 15,
            "garbageTimeDiff": 3,
        },
    }
