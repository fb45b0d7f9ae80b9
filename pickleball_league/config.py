import os

# Google Sheets Configuration
SPREADSHEET_ID = os.getenv("LEAGUE_SPREADSHEET_ID", "")
SCOPES = ['https://www.googleapis.com/auth/spreadsheets']
CREDENTIALS_FILE = "credentials.json"  # Only used by initialize_sheets.py
APP_URL = os.getenv("LEAGUE_APP_URL", "")  # Shown as a QR code on the home page

# Store retry settings
READ_MAX_RETRIES = 3
READ_RETRY_DELAY = 66  # seconds, Sheets quota window
WRITE_RETRY_DELAYS = [1, 3, 6]  # seconds
CACHE_SECONDS = 60

# Live refresh interval for the UI
LIVE_REFRESH_SECONDS = 15

# Sheet Names
SHEET_PLAYERS = "Players"
SHEET_TEAMS = "Teams"

# Column Names
# Players Sheet
COL_PLAYER_ID = "Player ID"
COL_NAME = "Player Name"
COL_SKILL_LEVEL = "Skill Level"
COL_GENDER = "Gender"
COL_FAMILY = "Family"
COL_RANK = "Rank"
COL_TEAM_ID = "Team ID"

# Teams Sheet
COL_TEAM_NAME = "Team Name"
COL_COLOR = "Color"
COL_ICON = "Icon"
COL_PLAYER_IDS = "Player IDs"
COL_CREATED_AT = "Created At"

PLAYER_COLUMNS = [
    COL_PLAYER_ID,
    COL_NAME,
    COL_SKILL_LEVEL,
    COL_GENDER,
    COL_FAMILY,
    COL_RANK,
    COL_TEAM_ID,
]

TEAM_COLUMNS = [
    COL_TEAM_ID,
    COL_TEAM_NAME,
    COL_COLOR,
    COL_ICON,
    COL_PLAYER_IDS,
    COL_RANK,
    COL_CREATED_AT,
]

SHEET_COLUMNS = {
    SHEET_PLAYERS: PLAYER_COLUMNS,
    SHEET_TEAMS: TEAM_COLUMNS,
}

# Team Settings
TEAM_CAPACITY = 2

TEAM_COLORS = [
    '#7CB9E8',  # bright blue
    '#F0B6D5',  # bright pink
    '#98FB98',  # pale green
    '#FFB347',  # pastel orange
    '#87CEEB',  # sky blue
    '#DDA0DD',  # plum
    '#F4C430',  # saffron
    '#FF69B4',  # hot pink
    '#98FF98',  # mint green
    '#E6E6FA',  # lavender
    '#FFA07A',  # light salmon
    '#9370DB',  # medium purple
    '#40E0D0',  # turquoise
    '#FFBF00',  # amber
]

# Icon name -> glyph shown in the UI
TEAM_ICONS = {
    'Star': '⭐',
    'Lightning': '⚡',
    'Rocket': '🚀',
    'Fire': '🔥',
    'Waves': '🌊',
    'Snowflake': '❄️',
    'Flame': '♨️',
    'Sparkle': '✨',
    'Flare': '🌟',
    'Flower': '🌸',
    'Mind': '🧠',
    'Cloud': '☁️',
    'Leaf': '🍃',
    'Wind': '💨',
}
TEAM_ICON_NAMES = list(TEAM_ICONS)

# Gender Values
GENDER_MALE = "Male"
GENDER_FEMALE = "Female"
GENDERS = [GENDER_MALE, GENDER_FEMALE]

# Families
FAMILY_COLORS = {
    'Miller': '#90caf9',
    'Holcomb': '#c48b9f',
    'Burton': '#81c784',
}
FAMILIES = list(FAMILY_COLORS)

# Skill level -> (label, color)
SKILL_LEVELS = {
    1: ("Beginner", "#c8e6c9"),
    2: ("Novice", "#fff9c4"),
    3: ("Intermediate", "#ffe0b2"),
    4: ("Advanced", "#ffccbc"),
    5: ("Expert", "#f8bbd0"),
}
MIN_SKILL_LEVEL = min(SKILL_LEVELS)
MAX_SKILL_LEVEL = max(SKILL_LEVELS)

TEAM_NAME_SUGGESTIONS = [
    # Miller family
    'Dill-icious Dynamos',
    'Mighty Picklers',
    'Smash and Dash',
    'The Pickle Paddlers',
    'Net Ninjas',
    'Dill Pickle Power',
    'The Court Jesters',
    'Rally Rascals',
    'Paddle Pushers',
    'The Pickleball Wizards',
    # Holcomb family
    'Holcomb Heroes',
    'The Dilly Dallyers',
    'Ace Avengers',
    'The Smash Bros',
    'Pickleball Pirates',
    'The Net Setters',
    'Rally Rebels',
    'The Court Crushers',
    'Paddle Warriors',
    'The Pickleball Posse',
    # Burton family
    'Burton Ballers',
    'The Pickleball Panthers',
    'Dill-ightful Players',
    'The Smash Sisters/Brothers',
    'The Net Navigators',
    'Rally Rockstars',
    'The Paddle Pals',
    'The Court Commanders',
    'The Pickleball Phantoms',
    'Dill-ight Brigade',
]

# Cookie used to remember the last family picked in the sidebar
COOKIE_LAST_FAMILY = "last_family"
