import streamlit as st
import logging
from pickleball_league import config
from pickleball_league.sidebar import (
    PAGE_CSS,
    add_team_member,
    get_league,
    live_refresh,
    render_sidebar,
    run_action,
    skill_badge,
    team_label,
)

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="Teams - Pickleball League", layout="wide")
st.markdown(PAGE_CSS, unsafe_allow_html=True)

league = get_league()
render_sidebar(league)

st.title("Teams")

if st.button("🎨 Randomize Colors & Icons", disabled=not league.teams):
    run_action(league.randomize_teams, success="Gave every team a new look")

teams = league.sorted_teams()
if not teams:
    st.info("No teams yet. Add one from the sidebar.")

unassigned_players = [p for p in league.sorted_players() if p['team_id'] is None]

for index, team in enumerate(teams):
    members = league.team_members(team)
    st.markdown(
        f'<div class="team-card" style="background-color: {team["color"]}">'
        f'#{team["rank"] or index + 1} {team_label(team)} '
        f'<span style="float: right">{league.team_capacity_text(team)}</span></div>',
        unsafe_allow_html=True
    )

    col_members, col_actions = st.columns([3, 2])
    with col_members:
        for player in members:
            col_name, col_button = st.columns([4, 1])
            with col_name:
                st.markdown(f"{player['name']} {skill_badge(player['skill_level'])}", unsafe_allow_html=True)
            with col_button:
                if st.button("Remove", key=f"unassign_{team['id']}_{player['id']}"):
                    run_action(league.assign_player, player['id'], None,
                               success=f"Removed {player['name']} from {team['name']}")

        if not league.is_team_full(team) and unassigned_players:
            assign_key = f"assign_{team['id']}"
            st.selectbox(
                "Add player",
                [None] + [p['id'] for p in unassigned_players],
                format_func=lambda pid: "Select a player..." if pid is None else league.get_player(pid)['name'],
                key=assign_key,
                on_change=add_team_member,
                args=(league, assign_key, team['id']),
            )

    with col_actions:
        col_up, col_down, col_delete = st.columns(3)
        with col_up:
            if st.button("⬆️", key=f"team_up_{team['id']}", disabled=index == 0):
                run_action(league.move_team, team['id'], -1)
        with col_down:
            if st.button("⬇️", key=f"team_down_{team['id']}", disabled=index == len(teams) - 1):
                run_action(league.move_team, team['id'], 1)
        with col_delete:
            if st.button("🗑️", key=f"team_delete_{team['id']}"):
                run_action(league.delete_team, team['id'], success=f"Deleted {team['name']}")

        with st.expander("Edit team"):
            with st.form(f"edit_team_{team['id']}"):
                name = st.text_input("Team Name", value=team['name'])
                color = st.selectbox(
                    "Color",
                    config.TEAM_COLORS,
                    index=config.TEAM_COLORS.index(team['color']) if team['color'] in config.TEAM_COLORS else 0,
                )
                icon_name = st.selectbox(
                    "Icon",
                    config.TEAM_ICON_NAMES,
                    index=config.TEAM_ICON_NAMES.index(team['icon_name']) if team['icon_name'] in config.TEAM_ICONS else 0,
                    format_func=lambda name: f"{config.TEAM_ICONS[name]} {name}",
                )
                if st.form_submit_button("Save"):
                    run_action(league.update_team, team['id'], name=name, color=color, icon_name=icon_name,
                               success=f"Saved {name}")

live_refresh(league)
