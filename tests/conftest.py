"""Shared fixtures: an in-memory league store and a fake Google Sheets service."""

import re
import random

import pandas as pd
import pytest

from pickleball_league import config
from pickleball_league.league_manager import LeagueManager


class MemoryStore:
    """Stands in for SheetsManager; keeps each sheet as a list of rows.

    Cells come back as strings, the way the Sheets API returns them.
    """

    def __init__(self):
        self.sheets = {}
        self.writes = []
        self._last_seen = {}

    def read_sheet(self, name, use_cache=True):
        values = self.sheets.get(name)
        if not values:
            return pd.DataFrame(columns=config.SHEET_COLUMNS[name])
        header = values[0]
        rows = [[str(cell) for cell in row] + [''] * (len(header) - len(row)) for row in values[1:]]
        return pd.DataFrame(rows, columns=header)

    def update_sheet(self, name, values):
        self.sheets[name] = [list(row) for row in values]
        self.writes.append(name)
        return True

    def has_sheet_changed(self, name):
        current = str(self.sheets.get(name))
        last = self._last_seen.get(name)
        self._last_seen[name] = current
        return last is None or current != last


class FakeClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        self.now += 1
        return self.now


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def league(store):
    return LeagueManager(store, rng=random.Random(7), clock=FakeClock())


@pytest.fixture
def roster(league):
    """Four players and two empty teams."""
    league.add_player('Ann', 3, config.GENDER_FEMALE, 'Miller')
    league.add_player('Bob', 2, config.GENDER_MALE, 'Miller')
    league.add_player('Cat', 4, config.GENDER_FEMALE, 'Holcomb')
    league.add_player('Dan', 5, config.GENDER_MALE, 'Burton')
    league.add_team('Net Ninjas')
    league.add_team('Rally Rebels')
    return league


RANGE_RE = re.compile(r"^(?P<sheet>[^!]+)(?:!A(?P<start>\d+)(?::[A-Z]+(?P<end>\d+))?)?$")


def _parse_range(range_name):
    match = RANGE_RE.match(range_name)
    start = int(match.group('start')) if match.group('start') else None
    end = int(match.group('end')) if match.group('end') else None
    return match.group('sheet'), start, end


class _Request:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


class FakeValues:
    def __init__(self, service):
        self.service = service

    def get(self, spreadsheetId, range):
        def run():
            self.service.calls.append(('get', range))
            if self.service.errors:
                raise self.service.errors.pop(0)
            sheet, _, _ = _parse_range(range)
            rows = [[str(cell) for cell in row] for row in self.service.grid.get(sheet, [])]
            return {'values': rows} if rows else {}
        return _Request(run)

    def batchUpdate(self, spreadsheetId, body):
        def run():
            self.service.calls.append(('batchUpdate', [d['range'] for d in body['data']]))
            if self.service.write_errors:
                raise self.service.write_errors.pop(0)
            for block in body['data']:
                sheet, start, _ = _parse_range(block['range'])
                grid = self.service.grid.setdefault(sheet, [])
                for offset, row in enumerate(block['values']):
                    index = start - 1 + offset
                    while len(grid) <= index:
                        grid.append([])
                    grid[index] = list(row)
            return {}
        return _Request(run)

    def update(self, spreadsheetId, range, valueInputOption, body):
        return self.batchUpdate(spreadsheetId, {'data': [{'range': range, 'values': body['values']}]})

    def clear(self, spreadsheetId, range, body):
        def run():
            self.service.calls.append(('clear', range))
            sheet, start, end = _parse_range(range)
            grid = self.service.grid.get(sheet, [])
            index = start - 1
            while index < min(end, len(grid)):
                grid[index] = []
                index += 1
            while grid and not grid[-1]:
                grid.pop()
            return {}
        return _Request(run)


class FakeSpreadsheets:
    def __init__(self, service):
        self.service = service
        self._values = FakeValues(service)

    def values(self):
        return self._values

    def get(self, spreadsheetId):
        return _Request(lambda: {
            'sheets': [{'properties': {'title': title}} for title in self.service.grid]
        })

    def batchUpdate(self, spreadsheetId, body):
        def run():
            for request in body['requests']:
                self.service.grid.setdefault(request['addSheet']['properties']['title'], [])
            return {}
        return _Request(run)


class FakeSheetsService:
    """Minimal in-memory emulation of the Sheets v4 values API."""

    def __init__(self, grid=None):
        self.grid = grid or {}
        self.calls = []
        self.errors = []
        self.write_errors = []
        self._spreadsheets = FakeSpreadsheets(self)

    def spreadsheets(self):
        return self._spreadsheets


@pytest.fixture
def sheets_service():
    return FakeSheetsService()


@pytest.fixture
def no_sleep(monkeypatch):
    sleeps = []
    monkeypatch.setattr('pickleball_league.sheets_manager.time.sleep', sleeps.append)
    return sleeps
