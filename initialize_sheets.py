from google.oauth2 import service_account
from googleapiclient.discovery import build
import logging
from pickleball_league import config

logger = logging.getLogger(__name__)


def initialize_sheets(service=None):
    """Create the Players and Teams worksheets if missing and write their headers."""
    if service is None:
        creds = service_account.Credentials.from_service_account_file(
            config.CREDENTIALS_FILE, scopes=config.SCOPES
        )
        service = build('sheets', 'v4', credentials=creds)
    sheets = service.spreadsheets()

    spreadsheet = sheets.get(spreadsheetId=config.SPREADSHEET_ID).execute()
    existing_sheets = [sheet['properties']['title'] for sheet in spreadsheet['sheets']]

    # Create any missing sheets
    requests = []
    for sheet_name in config.SHEET_COLUMNS:
        if sheet_name not in existing_sheets:
            requests.append({
                "addSheet": {
                    "properties": {
                        "title": sheet_name
                    }
                }
            })

    if requests:
        sheets.batchUpdate(
            spreadsheetId=config.SPREADSHEET_ID,
            body={"requests": requests}
        ).execute()
        logger.info("Created sheets: %s", [req['addSheet']['properties']['title'] for req in requests])

    # Initialize each sheet with headers
    for sheet_name, headers in config.SHEET_COLUMNS.items():
        sheets.values().update(
            spreadsheetId=config.SPREADSHEET_ID,
            range=f"{sheet_name}!A1",
            valueInputOption="RAW",
            body={"values": [headers]}
        ).execute()
    logger.info("Sheets initialized successfully!")
    return [req['addSheet']['properties']['title'] for req in requests]


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    initialize_sheets()
