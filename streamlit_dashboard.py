import streamlit as st
import pandas as pd
import plotly.express as px

from guess_league.config import ROUNDS_FILE
from guess_league.errors import GuessLeagueError, NotFound
from guess_league.ingestion.guess_parser import participant_template
from guess_league.ingestion.paste_mode import submit_round, delete_last_round
from guess_league.models import ScoredEntry
from guess_league.scoring.leaderboard import standings_dataframe
from guess_league.scoring.season import current_season, format_date_range
from guess_league.storage.round_store import RoundStore

# --- Page Configuration ---
st.set_page_config(
    page_title="Guess League",
    page_icon="🎯",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# --- Design System ---
ACCENT_COLORS = {
    "primary": "#FF6B6B",       # Coral red - primary accent
    "warning": "#F59E0B",       # Amber - neutral/caution
    "info": "#3B82F6",          # Blue - informational
}

RANK_ICONS = {
    1: "👑",
    2: "🥈",
    3: "🥉",
}


def rank_label(rank):
    """Rank with a medal icon for the podium."""
    icon = RANK_ICONS.get(int(rank))
    return f"{icon} #{rank}" if icon else f"#{rank}"


def apply_plotly_style(fig):
    """Apply consistent styling to Plotly figures.

    Text colors are NOT explicitly set, allowing Streamlit to inject theme-aware
    colors automatically.
    """
    system_font = '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif'
    grid_color = "rgba(128, 128, 128, 0.4)"

    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(family=system_font, size=16),
        xaxis=dict(gridcolor=grid_color, showgrid=False, zeroline=False),
        yaxis=dict(gridcolor=grid_color, showgrid=True, zeroline=False),
        showlegend=False,
        dragmode=False,  # Disable pan/zoom to prevent scroll hijacking on mobile
    )
    return fig


# --- Data Loading Functions ---
def get_store():
    return RoundStore(ROUNDS_FILE)


@st.cache_data(ttl=60)
def load_seasons():
    """Seasons with stored rounds plus the current one, newest first."""
    seasons = set(get_store().list_seasons())
    seasons.add(current_season())
    return sorted(seasons, reverse=True)


@st.cache_data(ttl=60)
def load_standings(season_id):
    return standings_dataframe(get_store().standings(season_id))


@st.cache_data(ttl=60)
def load_rounds(season_id):
    """Round summaries, oldest first (navigation order)."""
    return list(reversed(get_store().list_rounds(season_id)))


@st.cache_data(ttl=60)
def load_round_entries(season_id, round_number):
    entries = get_store().get_round(season_id, round_number)
    return pd.DataFrame(entries, columns=list(ScoredEntry._fields))


def refresh(message):
    """Drop cached data after a write and rerun, keeping a message for the next run."""
    st.session_state["flash"] = message
    st.cache_data.clear()
    st.rerun()


# --- Sections ---
def render_standings(season_id):
    st.subheader("Standings")
    df = load_standings(season_id)
    if df.empty:
        st.info("No rounds played in this season yet.")
        return

    fig = px.bar(
        df,
        x='participant_name',
        y='total_points',
        labels={'participant_name': 'Participant', 'total_points': 'Points'},
        color_discrete_sequence=[ACCENT_COLORS["primary"]],
    )
    apply_plotly_style(fig)
    fig.update_layout(height=300, margin=dict(l=20, r=20, t=30, b=20))
    st.plotly_chart(fig, use_container_width=True, config={'displayModeBar': False, 'scrollZoom': False})

    st.dataframe(
        df,
        width='stretch',
        hide_index=True,
        column_config={
            "position": st.column_config.NumberColumn("Pos", format="%d"),
            "participant_name": st.column_config.TextColumn("Participant"),
            "total_points": st.column_config.NumberColumn("Points", format="%d"),
            "total_deviation": st.column_config.NumberColumn("Total Deviation", format="%.2f"),
        }
    )


def render_rounds(season_id):
    st.subheader("Rounds")
    rounds = load_rounds(season_id)
    if not rounds:
        st.info("No rounds to show.")
        return

    # Latest round is shown first; clamp when the season or round count changed
    key = f"round_index_{season_id}"
    if key not in st.session_state or st.session_state[key] >= len(rounds):
        st.session_state[key] = len(rounds) - 1

    col_prev, col_label, col_next = st.columns([1, 3, 1])
    with col_prev:
        if st.button("◀ Previous", disabled=st.session_state[key] == 0):
            st.session_state[key] -= 1
            st.rerun()
    with col_next:
        if st.button("Next ▶", disabled=st.session_state[key] == len(rounds) - 1):
            st.session_state[key] += 1
            st.rerun()

    summary = rounds[st.session_state[key]]
    with col_label:
        st.markdown(
            f"**Round {summary.round_number}** of {len(rounds)} "
            f"· winning number **{summary.winning_number:g}**"
        )

    df = load_round_entries(season_id, summary.round_number)
    df.insert(0, 'place', df['rank'].map(rank_label))
    st.dataframe(
        df.drop(columns=['rank']),
        width='stretch',
        hide_index=True,
        column_config={
            "place": st.column_config.TextColumn("Place"),
            "participant_name": st.column_config.TextColumn("Participant"),
            "value": st.column_config.NumberColumn("Guess", format="%.2f"),
            "deviation": st.column_config.NumberColumn("Deviation", format="%.2f"),
            "points": st.column_config.NumberColumn("Points", format="%d"),
        }
    )


def render_submission(season_id):
    st.subheader("New Round")
    store = get_store()

    with st.form("submit_round"):
        winning_number = st.text_input("Winning number", placeholder="e.g. 42,5")
        text = st.text_area(
            "Guesses (one \"Name Number\" per line)",
            value=participant_template(store.participants(season_id)),
            height=240,
        )
        submitted = st.form_submit_button("Score and save round")

    if submitted:
        try:
            result = submit_round(text, winning_number, store)
        except GuessLeagueError as e:
            st.error(str(e))
        else:
            message = (
                f"Round {result['round_number']} (season {result['season_id']}) saved. "
                f"Winner: {result['winner'].participant_name}"
            )
            for w in result['warnings']:
                message += f"\n\n⚠️ {w}"
            refresh(message)

    with st.expander("Delete last round"):
        st.warning("This removes the most recent round of the current season and cannot be undone.")
        if st.button("Delete last round", type="primary"):
            try:
                deleted = delete_last_round(store)
            except NotFound as e:
                st.error(str(e))
            except GuessLeagueError as e:
                st.error(f"Could not delete the round: {e}")
            else:
                refresh(
                    f"Round {deleted.round_number} deleted "
                    f"({deleted.deleted_entry_count} entries)."
                )


# --- Main App ---
def main():
    st.title("Guess League")

    if "flash" in st.session_state:
        st.success(st.session_state.pop("flash"))

    active_season = current_season()
    seasons = load_seasons()

    with st.sidebar:
        st.header("📅 Season")
        season_id = st.selectbox(
            "Season",
            options=seasons,
            index=seasons.index(active_season),
            format_func=lambda s: f"Season {s}" + (" (current)" if s == active_season else ""),
            label_visibility="collapsed"
        )

    st.caption(f"Season {season_id} · {format_date_range(season_id)}")

    col_standings, col_rounds = st.columns([2, 3])
    with col_standings:
        render_standings(season_id)
    with col_rounds:
        render_rounds(season_id)

    if season_id == active_season:
        render_submission(season_id)


if __name__ == "__main__":
    main()
