import streamlit as st
import logging
import qrcode
import io
from pickleball_league import config
from pickleball_league.sidebar import PAGE_CSS, get_league, live_refresh, render_sidebar

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="Pickleball League", page_icon="🏓", layout="wide")
st.markdown(PAGE_CSS, unsafe_allow_html=True)

league = get_league()
render_sidebar(league)

st.title("Pickleball League")
st.write("Welcome to the family pickleball league organizer!")
st.markdown('1. <a href="Teams" target="_self">**Teams**</a> - Rank teams, give them colors and icons, and pair up players', unsafe_allow_html=True)
st.markdown('2. <a href="Players" target="_self">**Players**</a> - Rank players and edit their skill levels and families', unsafe_allow_html=True)

col1, col2 = st.columns(2)
col1.metric("Players", len(league.players))
col2.metric("Teams", len(league.teams))
unassigned = [p for p in league.players if p['team_id'] is None]
if unassigned:
    st.info(f"{len(unassigned)} player(s) are not on a team yet")

# Add QR code section
app_url = config.APP_URL
if app_url:
    st.markdown("---")
    st.subheader("Quick Access")
    st.write("Scan this code to open the league app on another device:")

    qr = qrcode.QRCode(version=1, box_size=10, border=5)
    qr.add_data(app_url)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    # Convert PIL image to bytes
    img_byte_arr = io.BytesIO()
    img.save(img_byte_arr, format='PNG')

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.image(img_byte_arr.getvalue())
        st.code(app_url, language="text")

live_refresh(league)
