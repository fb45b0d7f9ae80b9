"""Exceptions raised by the league controller and the sheets store."""


class LeagueError(Exception):
    """Base class for league errors shown to the user."""


class ValidationError(LeagueError, ValueError):
    """Bad input for a player or team field."""


class PlayerNotFoundError(LeagueError, LookupError):
    def __init__(self, player_id):
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


class TeamNotFoundError(LeagueError, LookupError):
    def __init__(self, team_id):
        super().__init__(f"Team {team_id} not found")
        self.team_id = team_id


class TeamFullError(LeagueError):
    def __init__(self, team_name, capacity):
        super().__init__(f"{team_name} already has {capacity} players")
        self.team_name = team_name
        self.capacity = capacity


class StoreError(LeagueError):
    """The Google Sheets store could not be read or written."""
