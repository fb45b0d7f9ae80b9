import streamlit as st
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
import pandas as pd
from . import config
from .errors import StoreError
import os
import json
import time
import logging

logger = logging.getLogger(__name__)

SECRET_KEYS = [
    'type',
    'project_id',
    'private_key_id',
    'private_key',
    'client_email',
    'client_id',
    'auth_uri',
    'token_uri',
    'auth_provider_x509_cert_url',
    'client_x509_cert_url',
    'universe_domain',
]


def _load_credentials_info():
    """Credentials from Streamlit secrets first, then GOOGLE_CREDENTIALS_JSON."""
    try:
        if 'google_credentials_type' in st.secrets:
            # Reconstruct credentials dict from flattened secrets
            return {key: st.secrets[f'google_credentials_{key}'] for key in SECRET_KEYS}
    except FileNotFoundError:
        # No secrets.toml outside of Streamlit Cloud
        pass
    creds_json = os.getenv('GOOGLE_CREDENTIALS_JSON')
    if creds_json:
        return json.loads(creds_json)
    return None


def _column_letter(count):
    return chr(ord('A') + count - 1)


class SheetsManager:
    """Google Sheets backed store: one worksheet per collection."""

    def __init__(self, service=None, spreadsheet_id=None):
        self.api_calls = 0
        self.spreadsheet_id = spreadsheet_id or config.SPREADSHEET_ID
        self._last_modified = {}  # Sheet contents seen at the last poll
        self._sheet_cache = {}

        if service is None:
            creds_info = _load_credentials_info()
            if not creds_info:
                raise StoreError("No credentials found in Streamlit secrets or environment variables")
            try:
                creds = service_account.Credentials.from_service_account_info(
                    creds_info, scopes=config.SCOPES
                )
                service = build('sheets', 'v4', credentials=creds)
            except (ValueError, KeyError) as e:
                raise StoreError(f"Error initializing SheetsManager: {e}") from e
        self.service = service
        self.sheet = self.service.spreadsheets()

    def _log_api_call(self, operation):
        self.api_calls += 1
        logger.debug("Sheets API call %d: %s", self.api_calls, operation)

    def _get_values(self, range_name):
        self._log_api_call(f"Reading {range_name}")
        result = self.sheet.values().get(
            spreadsheetId=self.spreadsheet_id,
            range=range_name
        ).execute()
        return result.get('values', [])

    def get_sheet_modified_time(self, sheet_name):
        """Use the values themselves as a proxy for changes."""
        try:
            return str(self._get_values(sheet_name))
        except HttpError as e:
            raise StoreError(f"Error polling sheet {sheet_name}: {e}") from e

    def has_sheet_changed(self, sheet_name):
        """Check if a sheet has changed since last check"""
        current_state = self.get_sheet_modified_time(sheet_name)
        last_state = self._last_modified.get(sheet_name)
        self._last_modified[sheet_name] = current_state
        changed = last_state is None or current_state != last_state
        if changed:
            # Cached frames for this sheet are stale now
            self._sheet_cache = {
                key: df for key, df in self._sheet_cache.items()
                if not key.startswith(f"{sheet_name}_")
            }
        return changed

    def read_sheet(self, range_name, use_cache=True):
        """Read a sheet and return as DataFrame with the expected column names."""
        cache_key = f"{range_name}_{int(time.time() / config.CACHE_SECONDS)}"
        if use_cache and cache_key in self._sheet_cache:
            return self._sheet_cache[cache_key].copy()

        expected_header = config.SHEET_COLUMNS.get(range_name)

        for attempt in range(config.READ_MAX_RETRIES):
            try:
                values = self._get_values(range_name)
                break
            except HttpError as e:
                if e.resp.status == 429 and attempt < config.READ_MAX_RETRIES - 1:
                    logger.warning("Quota exceeded reading %s, retrying in %ss",
                                   range_name, config.READ_RETRY_DELAY)
                    time.sleep(config.READ_RETRY_DELAY)
                    continue
                logger.error("Error reading sheet %s after %d attempts: %s",
                             range_name, attempt + 1, e)
                raise StoreError(f"Error reading sheet {range_name}: {e}") from e

        header = values[0] if values else []
        data = values[1:]

        if not values:
            df = pd.DataFrame(columns=expected_header or [])
        elif expected_header:
            # Map actual column positions to expected columns
            column_mapping = {}
            for i, col in enumerate(header):
                if col in expected_header:
                    column_mapping[i] = expected_header.index(col)

            # Reorder and pad columns as needed
            reordered_data = []
            for row in data:
                new_row = [''] * len(expected_header)
                for i, val in enumerate(row):
                    if i in column_mapping:
                        new_row[column_mapping[i]] = val
                reordered_data.append(new_row)
            df = pd.DataFrame(reordered_data, columns=expected_header)
        else:
            width = len(header)
            df = pd.DataFrame([row + [''] * (width - len(row)) for row in data], columns=header)

        self._sheet_cache[cache_key] = df
        return df.copy()

    def _clear_cache(self):
        """Clear internal sheet cache"""
        self._sheet_cache = {}

    def _verify_sheet_update(self, range_name, values):
        written = self._get_values(range_name)
        expected = [[str(cell) for cell in row] for row in values]
        actual = [[str(cell) for cell in row] for row in written[:len(values)]]
        # Sheets drops trailing empty cells
        actual = [row + [''] * (len(exp) - len(row)) for row, exp in zip(actual, expected)]
        return actual == expected

    def update_sheet(self, range_name, values):
        """Write header and rows in place, then clear rows left below the new data."""
        if not values:
            logger.warning("Attempted to update %s with empty values", range_name)
            return False

        header = values[0]
        rows = values[1:]
        num_rows = len(rows)
        end_col = _column_letter(len(header))

        data = [{'range': f"{range_name}!A1", 'values': [header]}]
        if rows:
            data.append({
                'range': f"{range_name}!A2:{end_col}{num_rows + 1}",
                'values': rows,
            })
        batch_update = {'valueInputOption': 'RAW', 'data': data}

        retry_delays = config.WRITE_RETRY_DELAYS
        max_retries = len(retry_delays)

        for attempt in range(max_retries):
            try:
                self._log_api_call(f"Updating {range_name}")
                self.sheet.values().batchUpdate(
                    spreadsheetId=self.spreadsheet_id,
                    body=batch_update
                ).execute()

                # Only verify after a failed attempt
                if attempt > 0 and not self._verify_sheet_update(range_name, values):
                    raise StoreError(f"Update of {range_name} did not stick")

                total_rows = len(self._get_values(range_name))
                if total_rows > num_rows + 1:  # +1 for header
                    self._log_api_call(f"Clearing stale rows in {range_name}")
                    self.sheet.values().clear(
                        spreadsheetId=self.spreadsheet_id,
                        range=f"{range_name}!A{num_rows + 2}:{end_col}{total_rows}",
                        body={}
                    ).execute()

                self._clear_cache()
                return True

            except (HttpError, StoreError) as e:
                if attempt < max_retries - 1:
                    logger.warning("Retry %d/%d updating %s after error: %s",
                                   attempt + 1, max_retries, range_name, e)
                    time.sleep(retry_delays[attempt])
                    continue
                logger.error("Error updating sheet %s after %d attempts: %s",
                             range_name, max_retries, e)
                raise StoreError(f"Error updating sheet {range_name}: {e}") from e

        return False
