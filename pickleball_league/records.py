import pandas as pd
from . import config
import logging

logger = logging.getLogger(__name__)


def _to_int(value):
    """Sheets hands numbers back as strings ("3", "3.0") or floats."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == '':
            return None
    elif pd.isna(value):
        return None
    return int(float(value))


def _to_str(value):
    if value is None:
        return ''
    if not isinstance(value, str) and pd.isna(value):
        return ''
    return str(value).strip()


def _parse_ids(value):
    text = _to_str(value)
    if not text:
        return []
    ids = []
    for part in text.split(','):
        if not part.strip():
            continue
        try:
            ids.append(_to_int(part))
        except (ValueError, OverflowError):
            logger.warning("Skipping non-numeric player id %r in %r", part.strip(), text)
    return ids


def _cell(value):
    return '' if value is None else value


def player_to_row(player):
    """Serialize a player record in Players sheet column order."""
    return [
        player['id'],
        player['name'],
        player['skill_level'],
        player['gender'],
        _cell(player.get('family')),
        _cell(player.get('rank')),
        _cell(player.get('team_id')),
    ]


def team_to_row(team):
    """Serialize a team record in Teams sheet column order."""
    return [
        team['id'],
        team['name'],
        team['color'],
        team['icon_name'],
        ','.join(str(pid) for pid in team.get('player_ids') or []),
        _cell(team.get('rank')),
        _cell(team.get('created_at')),
    ]


def players_from_frame(df):
    """Parse the Players sheet into player records, skipping rows with no id."""
    players = []
    for _, row in df.iterrows():
        player_id = _to_int(row.get(config.COL_PLAYER_ID))
        if player_id is None:
            continue
        players.append({
            'id': player_id,
            'name': _to_str(row.get(config.COL_NAME)),
            'skill_level': _to_int(row.get(config.COL_SKILL_LEVEL)),
            'gender': _to_str(row.get(config.COL_GENDER)),
            'family': _to_str(row.get(config.COL_FAMILY)) or None,
            'rank': _to_int(row.get(config.COL_RANK)),
            'team_id': _to_int(row.get(config.COL_TEAM_ID)),
        })
    return players


def teams_from_frame(df):
    """Parse the Teams sheet into team records, skipping rows with no id."""
    teams = []
    for _, row in df.iterrows():
        team_id = _to_int(row.get(config.COL_TEAM_ID))
        if team_id is None:
            continue
        teams.append({
            'id': team_id,
            'name': _to_str(row.get(config.COL_TEAM_NAME)),
            'color': _to_str(row.get(config.COL_COLOR)),
            'icon_name': _to_str(row.get(config.COL_ICON)),
            'player_ids': _parse_ids(row.get(config.COL_PLAYER_IDS)),
            'rank': _to_int(row.get(config.COL_RANK)),
            'created_at': _to_str(row.get(config.COL_CREATED_AT)) or None,
        })
    return teams


def players_to_values(players):
    return [list(config.PLAYER_COLUMNS)] + [player_to_row(p) for p in players]


def teams_to_values(teams):
    return [list(config.TEAM_COLUMNS)] + [team_to_row(t) for t in teams]
