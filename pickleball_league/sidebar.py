import streamlit as st
import extra_streamlit_components as stx
import time
import logging
from . import config
from .errors import LeagueError
from .league_manager import LeagueManager, suggest_team_name
from .sheets_manager import SheetsManager

logger = logging.getLogger(__name__)

PAGE_CSS = """
    <style>
    .block-container {
        padding: 1.5rem 1.4rem !important;
    }
    .team-card {
        border-radius: 8px;
        padding: 0.6rem 0.9rem;
        margin-bottom: 0.4rem;
        color: black;
        font-weight: 600;
    }
    .skill-badge, .family-badge {
        border-radius: 4px;
        padding: 0.1rem 0.5rem;
        color: black;
    }
    </style>
"""


def get_league():
    """One LeagueManager per browser session, loaded on first use."""
    if 'league' not in st.session_state:
        league = LeagueManager(SheetsManager())
        # The first poll always counts as a change, so this loads both sheets
        league.sync()
        st.session_state.league = league
    return st.session_state.league


def run_action(action, *args, success=None, **kwargs):
    """Run a league mutation, report errors, and rerun on success."""
    try:
        action(*args, **kwargs)
    except LeagueError as e:
        logger.warning("League action %s failed: %s", action.__name__, e)
        st.error(str(e))
        return False
    if success:
        st.toast(success)
    st.rerun()


def run_callback(action, *args, reset_key=None, reset_value=None, success=None, **kwargs):
    """on_change version of run_action.

    Streamlit reruns after a callback on its own, so the outcome is queued for
    show_flash instead. On failure the widget at reset_key goes back to
    reset_value.
    """
    try:
        action(*args, **kwargs)
    except LeagueError as e:
        logger.warning("League action %s failed: %s", action.__name__, e)
        st.session_state['flash'] = ('error', str(e))
        if reset_key is not None:
            st.session_state[reset_key] = reset_value
        return False
    if success:
        st.session_state['flash'] = ('success', success)
    return True


def show_flash():
    """Report the outcome queued by the last callback, once."""
    flash = st.session_state.pop('flash', None)
    if flash is None:
        return
    kind, message = flash
    if kind == 'error':
        st.error(message)
    else:
        st.toast(message)


def change_player_team(league, key, player_id, current_team_id):
    """on_change for a player's team selectbox."""
    run_callback(league.assign_player, player_id, st.session_state[key],
                 reset_key=key, reset_value=current_team_id)


def add_team_member(league, key, team_id):
    """on_change for a team's "Add player" selectbox; the box always resets."""
    player_id = st.session_state[key]
    st.session_state[key] = None
    if player_id is None:
        return
    run_callback(league.assign_player, player_id, team_id, success="Player added")


def skill_badge(level):
    label, color = config.SKILL_LEVELS.get(level, ("Unknown", "#e0e0e0"))
    return f'<span class="skill-badge" style="background-color: {color}">Lvl {level} - {label}</span>'


def family_badge(family):
    color = config.FAMILY_COLORS.get(family, "#e0e0e0")
    return f'<span class="family-badge" style="background-color: {color}">{family or "-"}</span>'


def team_label(team):
    return f"{config.TEAM_ICONS.get(team['icon_name'], '')} {team['name']}"


def last_family(saved_family):
    """Family picked last: this session's choice first, then the cookie."""
    family = st.session_state.get('last_family', saved_family)
    return family if family in config.FAMILIES else None


def render_sidebar(league):
    """Add-team and add-player forms."""
    show_flash()
    cookie_manager = stx.CookieManager()

    with st.sidebar:
        st.header("Team & Player Management")

        st.subheader("Add New Team")
        if 'team_name_input' not in st.session_state:
            st.session_state.team_name_input = ""
        if st.button("🎲 Random team name"):
            st.session_state.team_name_input = suggest_team_name(league.teams)

        with st.form("add_team_form", clear_on_submit=True):
            team_name = st.text_input("Team Name", key="team_name_input")
            if st.form_submit_button("Add Team") and team_name.strip():
                run_action(league.add_team, team_name, success=f"Added {team_name.strip()}")

        st.markdown("---")
        st.subheader("Add New Player")

        saved_family = cookie_manager.get(cookie=config.COOKIE_LAST_FAMILY)
        default_family = last_family(saved_family)
        if default_family is not None and default_family != saved_family:
            # Only written on a run that is not cut short by st.rerun
            cookie_manager.set(config.COOKIE_LAST_FAMILY, default_family)
        family_index = config.FAMILIES.index(default_family) if default_family else 0

        with st.form("add_player_form", clear_on_submit=True):
            player_name = st.text_input("Player Name")
            gender = st.radio("Gender", config.GENDERS, horizontal=True)
            family = st.radio("Family", config.FAMILIES, index=family_index, horizontal=True)
            skill_level = st.selectbox(
                "Skill Level",
                list(config.SKILL_LEVELS),
                format_func=lambda level: f"Lvl {level} - {config.SKILL_LEVELS[level][0]}",
            )
            if st.form_submit_button("Add Player") and player_name.strip():
                st.session_state['last_family'] = family
                run_action(league.add_player, player_name, skill_level, gender, family,
                           success=f"Added {player_name.strip()}")

        st.markdown("---")
        st.toggle("Live updates", key="live_updates", value=True)


def live_refresh(league):
    """Poll the sheets and rerun when another session changed them."""
    if not st.session_state.get("live_updates", True):
        return
    try:
        changed = league.sync()
    except LeagueError as e:
        st.warning(f"Live updates paused: {e}")
        return
    if changed:
        st.rerun()
    time.sleep(config.LIVE_REFRESH_SECONDS)
    st.rerun()
