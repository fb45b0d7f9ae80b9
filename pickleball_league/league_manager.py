import random
import time
import logging
from datetime import datetime
from . import config
from . import records
from .errors import (
    PlayerNotFoundError,
    TeamFullError,
    TeamNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

PLAYER_EDITABLE_FIELDS = {'name', 'skill_level', 'gender', 'family', 'rank'}
TEAM_EDITABLE_FIELDS = {'name', 'color', 'icon_name', 'rank'}


def suggest_team_name(teams, rng=random):
    """Pick a suggested team name that no team is using yet."""
    existing_names = {team['name'] for team in teams}
    available_names = [name for name in config.TEAM_NAME_SUGGESTIONS if name not in existing_names]
    if not available_names:
        # All names are used, fall back to the full list
        return rng.choice(config.TEAM_NAME_SUGGESTIONS)
    return rng.choice(available_names)


def _clean_name(name, what):
    name = (name or '').strip()
    if not name:
        raise ValidationError(f"{what} name cannot be empty")
    return name


def _check_skill_level(skill_level):
    try:
        level = int(skill_level)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid skill level: {skill_level}") from None
    if level not in config.SKILL_LEVELS:
        raise ValidationError(
            f"Skill level must be between {config.MIN_SKILL_LEVEL} and {config.MAX_SKILL_LEVEL}"
        )
    return level


def _check_gender(gender):
    if gender not in config.GENDERS:
        raise ValidationError(f"Invalid gender: {gender}")
    return gender


def _check_family(family):
    if family not in config.FAMILIES:
        raise ValidationError(f"Unknown family: {family}")
    return family


def _check_rank(rank):
    try:
        rank = int(rank)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid rank: {rank}") from None
    if rank < 1:
        raise ValidationError("Rank must be 1 or more")
    return rank


class LeagueManager:
    """In-memory mirror of the Players and Teams sheets plus every league mutation.

    Each mutation re-reads both sheets, applies the change to the fresh
    mirror and writes the affected sheet(s) back. Paired writes
    (player <-> team references) are issued one after the other with no
    transactional guarantee.
    """

    def __init__(self, store, rng=None, clock=None):
        self.store = store
        self.rng = rng or random.Random()
        self.clock = clock or time.time
        self.players = []
        self.teams = []

    # Loading

    def refresh(self, use_cache=True):
        """Reload both collections from the store.

        Records that survive the reload keep their dict identity, so callers
        holding a player or team see the current values.
        """
        players = records.players_from_frame(self.store.read_sheet(config.SHEET_PLAYERS, use_cache=use_cache))
        teams = records.teams_from_frame(self.store.read_sheet(config.SHEET_TEAMS, use_cache=use_cache))
        self.players = _merge(self.players, players)
        self.teams = _merge(self.teams, teams)

    def _reload(self):
        # Other sessions may have written since our last sync
        self.refresh(use_cache=False)

    def sync(self):
        """Reload if either sheet changed since the last poll."""
        players_changed = self.store.has_sheet_changed(config.SHEET_PLAYERS)
        teams_changed = self.store.has_sheet_changed(config.SHEET_TEAMS)
        if players_changed or teams_changed:
            self.refresh()
            return True
        return False

    def _save_players(self):
        self.store.update_sheet(config.SHEET_PLAYERS, records.players_to_values(self.players))

    def _save_teams(self):
        self.store.update_sheet(config.SHEET_TEAMS, records.teams_to_values(self.teams))

    def _new_id(self, existing):
        new_id = int(self.clock() * 1000)
        highest = max((item['id'] for item in existing), default=0)
        return max(new_id, highest + 1)

    # Lookups

    def get_player(self, player_id):
        for player in self.players:
            if player['id'] == player_id:
                return player
        raise PlayerNotFoundError(player_id)

    def get_team(self, team_id):
        for team in self.teams:
            if team['id'] == team_id:
                return team
        raise TeamNotFoundError(team_id)

    def team_members(self, team):
        by_id = {p['id']: p for p in self.players}
        return [by_id[pid] for pid in team.get('player_ids') or [] if pid in by_id]

    def sorted_players(self):
        return sorted(self.players, key=lambda p: p['rank'] if p['rank'] is not None else len(self.players) + 1)

    def sorted_teams(self):
        # Teams without a rank sort by their position in the collection
        order = {t['id']: i + 1 for i, t in enumerate(self.teams)}
        return sorted(self.teams, key=lambda t: t['rank'] if t['rank'] is not None else order[t['id']])

    # Players

    def add_player(self, name, skill_level, gender, family):
        name = _clean_name(name, "Player")
        skill_level = _check_skill_level(skill_level)
        gender = _check_gender(gender)
        family = _check_family(family)

        self._reload()
        player = {
            'id': self._new_id(self.players),
            'name': name,
            'skill_level': skill_level,
            'gender': gender,
            'family': family,
            'rank': len(self.players) + 1,
            'team_id': None,
        }
        self.players.append(player)
        self._save_players()
        logger.info("Added player %s (rank %d)", player['name'], player['rank'])
        return player

    def update_player(self, player_id, **updates):
        unknown = set(updates) - PLAYER_EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update player fields: {', '.join(sorted(unknown))}")
        self._reload()
        player = self.get_player(player_id)

        cleaned = {}
        if 'name' in updates:
            cleaned['name'] = _clean_name(updates['name'], "Player")
        if 'skill_level' in updates:
            cleaned['skill_level'] = _check_skill_level(updates['skill_level'])
        if 'gender' in updates:
            cleaned['gender'] = _check_gender(updates['gender'])
        if 'family' in updates:
            cleaned['family'] = _check_family(updates['family'])
        if 'rank' in updates:
            cleaned['rank'] = _check_rank(updates['rank'])

        player.update(cleaned)
        self._save_players()
        logger.info("Updated player %s: %s", player['name'], sorted(cleaned))
        return player

    def delete_player(self, player_id):
        self._reload()
        player = self.get_player(player_id)
        self.players = [p for p in self.players if p['id'] != player_id]
        for i, p in enumerate(self.sorted_players()):
            p['rank'] = i + 1
        self._save_players()

        # Drop the player from any team that still lists it
        teams_changed = False
        for team in self.teams:
            if player_id in team['player_ids']:
                team['player_ids'] = [pid for pid in team['player_ids'] if pid != player_id]
                teams_changed = True
        if teams_changed:
            self._save_teams()
        logger.info("Deleted player %s", player['name'])

    def move_player(self, player_id, direction):
        """Swap a player with its neighbour; direction is -1 (up) or +1 (down)."""
        self._reload()
        moved = _move(self.sorted_players(), player_id, direction, PlayerNotFoundError)
        if moved:
            self._save_players()
        return moved

    # Teams

    def _pick_unused(self, pool, used):
        unused = [value for value in pool if value not in used]
        if unused:
            return self.rng.choice(unused)
        # Every value is taken, so any will do
        return self.rng.choice(pool)

    def random_team_color(self):
        return self._pick_unused(config.TEAM_COLORS, {t['color'] for t in self.teams})

    def random_team_icon(self):
        return self._pick_unused(config.TEAM_ICON_NAMES, {t['icon_name'] for t in self.teams})

    def add_team(self, name):
        name = _clean_name(name, "Team")
        self._reload()
        max_rank = max((t['rank'] or 0 for t in self.teams), default=0)
        team = {
            'id': self._new_id(self.teams),
            'name': name,
            'color': self.random_team_color(),
            'icon_name': self.random_team_icon(),
            'player_ids': [],
            'rank': max_rank + 1,
            'created_at': datetime.fromtimestamp(self.clock()).isoformat(timespec='seconds'),
        }
        self.teams.append(team)
        self._save_teams()
        logger.info("Added team %s (%s, %s)", team['name'], team['color'], team['icon_name'])
        return team

    def update_team(self, team_id, **updates):
        unknown = set(updates) - TEAM_EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update team fields: {', '.join(sorted(unknown))}")
        self._reload()
        team = self.get_team(team_id)

        cleaned = {}
        if 'name' in updates:
            cleaned['name'] = _clean_name(updates['name'], "Team")
        if 'color' in updates:
            if updates['color'] not in config.TEAM_COLORS:
                raise ValidationError(f"Unknown team color: {updates['color']}")
            cleaned['color'] = updates['color']
        if 'icon_name' in updates:
            if updates['icon_name'] not in config.TEAM_ICONS:
                raise ValidationError(f"Unknown team icon: {updates['icon_name']}")
            cleaned['icon_name'] = updates['icon_name']
        if 'rank' in updates:
            cleaned['rank'] = _check_rank(updates['rank'])

        team.update(cleaned)
        self._save_teams()
        logger.info("Updated team %s: %s", team['name'], sorted(cleaned))
        return team

    def delete_team(self, team_id):
        self._reload()
        team = self.get_team(team_id)

        # Unassign everyone that was on this team
        members = set(team['player_ids'])
        cleared = False
        for player in self.players:
            if player['id'] in members or player.get('team_id') == team_id:
                player['team_id'] = None
                cleared = True
        if cleared:
            self._save_players()

        self.teams = [t for t in self.teams if t['id'] != team_id]
        for i, t in enumerate(self.sorted_teams()):
            t['rank'] = i + 1
        self._save_teams()
        logger.info("Deleted team %s", team['name'])

    def move_team(self, team_id, direction):
        """Swap a team with its neighbour and rewrite every team rank in one write."""
        self._reload()
        moved = _move(self.sorted_teams(), team_id, direction, TeamNotFoundError)
        if moved:
            self._save_teams()
        return moved

    def randomize_teams(self):
        """Shuffle the palettes and hand each team a fresh color and icon."""
        self._reload()
        available_colors = list(config.TEAM_COLORS)
        available_icons = list(config.TEAM_ICON_NAMES)
        self.rng.shuffle(available_colors)
        self.rng.shuffle(available_icons)

        for index, team in enumerate(self.teams):
            team['color'] = available_colors[index % len(available_colors)]
            team['icon_name'] = available_icons[index % len(available_icons)]
        if self.teams:
            self._save_teams()

    def is_team_full(self, team):
        if not team:
            return False
        return len(team.get('player_ids') or []) >= config.TEAM_CAPACITY

    def team_capacity_text(self, team):
        return f"{len(team.get('player_ids') or [])}/{config.TEAM_CAPACITY}"

    # Assignment

    def assign_player(self, player_id, team_id):
        """Move a player onto a team, or off every team when team_id is None."""
        self._reload()
        player = self.get_player(player_id)
        target = self.get_team(team_id) if team_id is not None else None

        if target is not None and player_id in target['player_ids']:
            if player.get('team_id') != team_id:
                player['team_id'] = team_id
                self._save_players()
            return
        if self.is_team_full(target):
            raise TeamFullError(target['name'], config.TEAM_CAPACITY)

        # Remove player from previous team if any
        for team in self.teams:
            if player_id in team['player_ids']:
                team['player_ids'] = [pid for pid in team['player_ids'] if pid != player_id]

        if target is not None:
            target['player_ids'] = target['player_ids'] + [player_id]
        self._save_teams()

        player['team_id'] = team_id
        self._save_players()
        logger.info("Assigned %s to %s", player['name'], target['name'] if target else "no team")


def _move(ordered, item_id, direction, not_found):
    """Swap item_id with its neighbour in ordered and renumber ranks 1..N."""
    if direction not in (-1, 1):
        raise ValidationError(f"Invalid move direction: {direction}")
    current_index = next((i for i, item in enumerate(ordered) if item['id'] == item_id), None)
    if current_index is None:
        raise not_found(item_id)

    target_index = current_index + direction
    if target_index < 0 or target_index >= len(ordered):
        return False

    ordered[current_index], ordered[target_index] = ordered[target_index], ordered[current_index]
    for i, item in enumerate(ordered):
        item['rank'] = i + 1
    return True


def _merge(current, loaded):
    """Loaded records in store order, reusing the current dict for each known id."""
    by_id = {item['id']: item for item in current}
    merged = []
    for record in loaded:
        existing = by_id.get(record['id'])
        if existing is None:
            merged.append(record)
            continue
        existing.clear()
        existing.update(record)
        merged.append(existing)
    return merged
