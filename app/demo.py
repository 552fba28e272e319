"""
Minesweeper Agent - Interactive Demo

Run with: streamlit run app/demo.py
"""

import logging
from typing import Optional

import streamlit as st

from minesweeper_agent import GameSession
from minesweeper_agent.config import DEFAULT_HEIGHT, DEFAULT_MINES, DEFAULT_WIDTH, LEVELS
from minesweeper_agent.utils import Cell


def render_board_html(
    session: GameSession,
    highlight_cell: Optional[Cell] = None,
    show_knowledge: bool = True,
) -> str:
    """Render the board as HTML with styling."""
    # Scale cell size based on board width
    if session.width >= 30:
        cell_size = 14
        font_size = "10px"
    elif session.width >= 16:
        cell_size = 20
        font_size = "13px"
    else:
        cell_size = 26
        font_size = "15px"

    colors = {
        "0": "#cccccc",
        "1": "#0000ff",
        "2": "#008000",
        "3": "#ff0000",
        "4": "#000080",
        "5": "#800000",
        "6": "#008080",
        "7": "#000000",
        "8": "#808080",
    }

    game = session.game
    ai = session.ai
    show_mines = session.lost

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for row in range(session.height):
        html += "<tr>"
        for col in range(session.width):
            cell_pos = (row, col)
            state = ai.cell_state(cell_pos) if show_knowledge else None

            if cell_pos in session.revealed:
                cell = str(game.nearby_mines(cell_pos))
                bg = "#f0f0f0" if cell == "0" else "#ffffff"
                text_color = colors.get(cell, "#000000")
            elif cell_pos in session.flags:
                cell = "F"
                bg = "#ffa500"
                text_color = "#ffffff"
            elif show_mines and game.is_mine(cell_pos):
                cell = "M"
                bg = "#ffcccc"
                text_color = "#ff0000"
            elif state == "M":
                cell = "M"  # Deduced mine, not flagged yet
                bg = "#ffe0b3"
                text_color = "#cc6600"
            elif state == "S":
                cell = "S"  # Deduced safe, not revealed yet
                bg = "#d9f2d9"
                text_color = "#008000"
            else:
                cell = "."
                bg = "#c0c0c0"
                text_color = "#666666"

            border = "2px solid #ff0000" if cell_pos == highlight_cell else "1px solid #999"
            display = cell if cell != "0" else " "

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{display}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def main():
    st.set_page_config(
        page_title="Minesweeper Agent",
        page_icon="💣",
        layout="wide",
    )

    st.title("Minesweeper Agent")
    st.markdown("""
    A knowledge-based agent that deduces safe cells and mines from the clues it has seen.
    """)

    # Sidebar configuration
    st.sidebar.header("Game Configuration")

    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Default (8x8, 8)"] + [name.capitalize() for name in LEVELS] + ["Custom"],
    )

    if preset == "Default (8x8, 8)":
        height, width, mines = DEFAULT_HEIGHT, DEFAULT_WIDTH, DEFAULT_MINES
    elif preset == "Custom":
        width = st.sidebar.slider("Width", 3, 30, 8)
        height = st.sidebar.slider("Height", 3, 30, 8)
        max_mines = width * height - 1
        mines = st.sidebar.slider("Mines", 1, max_mines, min(8, max_mines))
    else:
        height, width, mines = LEVELS[preset.lower()]

    show_knowledge = st.sidebar.checkbox("Show agent deductions", value=True)

    # Initialize session state
    current_settings = (height, width, mines)
    if st.session_state.get("settings") != current_settings:
        st.session_state.session = GameSession(height, width, mines)
        st.session_state.last_move = None
        st.session_state.settings = current_settings

    session: GameSession = st.session_state.session

    col1, col2 = st.columns([3, 1])

    with col1:
        st.subheader("Game Board")

        btn_col1, btn_col2, btn_col3 = st.columns(3)
        with btn_col1:
            if st.button("AI Move", type="primary"):
                st.session_state.last_move = session.ai_move()
                st.rerun()
        with btn_col2:
            if st.button("Play to End"):
                session.play_to_end()
                st.session_state.last_move = None
                st.rerun()
        with btn_col3:
            if st.button("Reset"):
                session.reset()
                st.session_state.last_move = None
                st.rerun()

        in_col1, in_col2, in_col3, in_col4 = st.columns(4)
        with in_col1:
            row = st.number_input("Row", 0, height - 1, 0)
        with in_col2:
            col = st.number_input("Column", 0, width - 1, 0)
        with in_col3:
            if st.button("Reveal"):
                session.reveal((int(row), int(col)))
                st.session_state.last_move = (int(row), int(col))
                st.rerun()
        with in_col4:
            if st.button("Flag"):
                session.flag((int(row), int(col)))
                st.rerun()

        html = render_board_html(
            session,
            highlight_cell=st.session_state.last_move,
            show_knowledge=show_knowledge,
        )
        st.markdown(html, unsafe_allow_html=True)

        if session.lost:
            st.error("Game Over! Hit a mine.")
        elif session.won:
            st.success("All mines flagged. Winner!")

        st.markdown("""
        <div style="font-size: 12px; margin-top: 10px;">
        <b>Legend:</b>
        <span style="background: #c0c0c0; color: #666666; padding: 2px 6px; margin: 0 4px; font-weight: bold;">.</span> Undetermined
        <span style="color: #0000ff; font-weight: bold; margin: 0 4px;">1-8</span> Adjacent mines
        <span style="background: #d9f2d9; color: #008000; padding: 2px 6px; margin: 0 4px; font-weight: bold;">S</span> Deduced safe
        <span style="background: #ffe0b3; color: #cc6600; padding: 2px 6px; margin: 0 4px; font-weight: bold;">M</span> Deduced mine
        <span style="background: #ffa500; color: white; padding: 2px 6px; margin: 0 4px; font-weight: bold;">F</span> Flagged
        </div>
        """, unsafe_allow_html=True)

    with col2:
        st.subheader("Agent Statistics")
        for label, value in session.ai.get_stats().items():
            st.text(f"{label.replace('_', ' ')}: {value}")

        st.markdown("---")
        st.markdown("**Knowledge base**")
        sentences = session.ai.knowledge
        if sentences:
            st.text("\n".join(str(s) for s in sentences[:20]))
            if len(sentences) > 20:
                st.text(f"... and {len(sentences) - 20} more")
        else:
            st.text("(empty)")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
