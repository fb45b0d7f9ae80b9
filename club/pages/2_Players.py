import streamlit as st
import logging
from pickleball_league import config
from pickleball_league.sidebar import (
    PAGE_CSS,
    change_player_team,
    family_badge,
    get_league,
    live_refresh,
    render_sidebar,
    run_action,
    skill_badge,
    team_label,
)

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="Players - Pickleball League", layout="wide")
st.markdown(PAGE_CSS, unsafe_allow_html=True)

league = get_league()
render_sidebar(league)

st.title("Players")

players = league.sorted_players()
if not players:
    st.info("No players yet. Add one from the sidebar.")

teams_by_id = {t['id']: t for t in league.teams}

for index, player in enumerate(players):
    gender_icon = "♀️" if player['gender'] == config.GENDER_FEMALE else "♂️"
    col_rank, col_name, col_team, col_up, col_down, col_delete = st.columns([1, 5, 3, 1, 1, 1])
    with col_rank:
        st.write(f"#{player['rank']}")
    with col_name:
        st.markdown(
            f"**{player['name']}** {gender_icon} {skill_badge(player['skill_level'])} {family_badge(player['family'])}",
            unsafe_allow_html=True
        )
    with col_team:
        # A full team is only offered to players already on it
        team_options = [None] + [
            t['id'] for t in league.sorted_teams()
            if t['id'] == player['team_id'] or not league.is_team_full(t)
        ]
        current = player['team_id'] if player['team_id'] in teams_by_id else None
        # The key follows the stored team so a change from another session resets the box
        team_key = f"player_team_{player['id']}_{current}"
        st.selectbox(
            "Team",
            team_options,
            index=team_options.index(current),
            format_func=lambda tid: "No team" if tid is None else team_label(teams_by_id[tid]),
            key=team_key,
            on_change=change_player_team,
            args=(league, team_key, player['id'], current),
            label_visibility="collapsed",
        )
    with col_up:
        if st.button("⬆️", key=f"player_up_{player['id']}", disabled=index == 0):
            run_action(league.move_player, player['id'], -1)
    with col_down:
        if st.button("⬇️", key=f"player_down_{player['id']}", disabled=index == len(players) - 1):
            run_action(league.move_player, player['id'], 1)
    with col_delete:
        if st.button("🗑️", key=f"player_delete_{player['id']}"):
            run_action(league.delete_player, player['id'], success=f"Deleted {player['name']}")

    with st.expander(f"Edit {player['name']}"):
        with st.form(f"edit_player_{player['id']}"):
            name = st.text_input("Player Name", value=player['name'])
            skill_level = st.selectbox(
                "Skill Level",
                list(config.SKILL_LEVELS),
                index=list(config.SKILL_LEVELS).index(player['skill_level']) if player['skill_level'] in config.SKILL_LEVELS else 0,
                format_func=lambda level: f"Lvl {level} - {config.SKILL_LEVELS[level][0]}",
            )
            gender = st.radio(
                "Gender", config.GENDERS, horizontal=True,
                index=config.GENDERS.index(player['gender']) if player['gender'] in config.GENDERS else 0,
            )
            family = st.radio(
                "Family", config.FAMILIES, horizontal=True,
                index=config.FAMILIES.index(player['family']) if player['family'] in config.FAMILIES else 0,
            )
            if st.form_submit_button("Save"):
                run_action(league.update_player, player['id'], name=name, skill_level=skill_level,
                           gender=gender, family=family, success=f"Saved {name}")

live_refresh(league)
