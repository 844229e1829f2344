#!/usr/bin/env python3
"""Streamlit app for playing sliding-tile and jigsaw puzzles."""

import streamlit as st
from PIL import Image
from pathlib import Path
import sys
from typing import Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from playzzle.best_time import BestTimeCache, JsonBestTimeStore, MemoryBestTimeStore
from playzzle.config import DEFAULT_DIFFICULTY, DIFFICULTY_LEVELS, GameConfig
from playzzle.geometry import Point, Size
from playzzle.renderer import PuzzleImage
from playzzle.session import GameSession, GameState

# Page config
st.set_page_config(
    page_title="Playzzle",
    page_icon="🧩",
    layout="wide",
)

# Get the project root directory
PROJECT_ROOT = Path(__file__).parent.parent

MOTIVATIONAL_MESSAGES = [
    "You're a puzzle-solving superhero!",
    "Incredible! Your brain is a superpower!",
    "You've conquered the challenge like a true champion!",
    "Brilliant! You've got the mind of a genius!",
]


def get_available_images() -> list[Path]:
    """Get list of available images from the images directory."""
    images_dir = PROJECT_ROOT / "images"
    if not images_dir.exists():
        return []

    extensions = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp"}
    images = [f for f in images_dir.iterdir() if f.suffix.lower() in extensions]
    return sorted(images)


def create_session(
    image: PuzzleImage,
    game_type: str,
    difficulty: int,
    container: Size,
    puzzle_id: Optional[str],
    best_times: BestTimeCache,
    seed: Optional[int] = None,
) -> GameSession:
    """Create a session for an image, laid out and ready to start."""
    config = GameConfig(game_type=game_type, difficulty=difficulty, shuffle_seed=seed)
    session = GameSession(config, container=container, best_times=best_times, puzzle_id=puzzle_id)
    session.load_image(image.size)
    return session


def initialize_session_state():
    """Initialize session state variables."""
    if "session" not in st.session_state:
        st.session_state.session = None
    if "image" not in st.session_state:
        st.session_state.image = None
    if "last_message" not in st.session_state:
        st.session_state.last_message = None
    if "solved_message" not in st.session_state:
        st.session_state.solved_message = None
    if "best_times" not in st.session_state:
        # Shared by every puzzle played in this browser session
        path = GameConfig().best_times_path
        store = JsonBestTimeStore(path) if path else MemoryBestTimeStore()
        st.session_state.best_times = BestTimeCache(store)


def reset_game():
    """Reset the game state."""
    st.session_state.session = None
    st.session_state.image = None
    st.session_state.last_message = None
    st.session_state.solved_message = None


def restart_game(session: GameSession, state) -> None:
    """Reshuffle the current puzzle, forgetting any solved message."""
    session.restart()
    state.solved_message = None


def play_again(session: GameSession, state) -> None:
    session.play_again()
    state.solved_message = None


def render_board(session: GameSession, image: PuzzleImage):
    """Current board as an image array."""
    if session.game_type == "slide":
        return image.render_slide(
            session.slide_board,
            session.board_bounds,
            hide_blank=session.state == GameState.PLAYING,
        )
    return image.render_jigsaw(session.jigsaw_board)


def slide_controls(session: GameSession):
    """A button per tile; clicking a tile next to the blank slides it."""
    n = session.difficulty
    blank = n * n
    playing = session.state == GameState.PLAYING

    for row in range(n):
        cols = st.columns(n)
        for col in range(n):
            index = row * n + col
            tile = session.slide_board.tiles[index]
            label = " " if tile == blank and playing else str(tile)
            with cols[col]:
                if st.button(
                    label,
                    key=f"tile_{index}",
                    disabled=not playing or not session.slide_board.can_move(index),
                    use_container_width=True,
                ):
                    session.move_tile(index)
                    st.rerun()


def jigsaw_controls(session: GameSession):
    """Drop a loose piece at container coordinates."""
    board = session.jigsaw_board
    loose = [p for p in board.pieces if not p.placed]
    geometry = session.geometry

    st.caption(
        f"Board top-left is at ({geometry.origin.x:.0f}, {geometry.origin.y:.0f}); "
        f"each cell is {geometry.cell_width:.0f}×{geometry.cell_height:.0f} px. "
        f"Pieces snap when dropped within {board.snap_distance:.0f} px of home."
    )

    if not loose or session.state != GameState.PLAYING:
        return

    with st.form("drop_form"):
        piece_id = st.selectbox(
            "Piece",
            [p.id for p in loose],
            format_func=lambda i: f"#{i} (row {i // board.grid_size + 1}, col {i % board.grid_size + 1})",
        )
        col_x, col_y = st.columns(2)
        with col_x:
            x = st.number_input("X", min_value=0.0, max_value=float(geometry.container.width), value=0.0)
        with col_y:
            y = st.number_input("Y", min_value=0.0, max_value=float(geometry.container.height), value=0.0)

        if st.form_submit_button("📍 Drop Piece", type="primary", use_container_width=True):
            result = session.drop_piece(piece_id, Point(x, y))
            if result is not None and result.placed:
                st.session_state.last_message = f"✅ Piece #{piece_id} snapped into place."
            else:
                st.session_state.last_message = f"Piece #{piece_id} dropped at ({x:.0f}, {y:.0f})."
            st.rerun()


def main():
    """Main app entry point."""
    initialize_session_state()

    st.title("🧩 Playzzle")
    st.markdown("Turn any picture into a sliding-tile or jigsaw puzzle and race your best time.")

    with st.sidebar:
        st.header("⚙️ Game Settings")

        image_source_type = st.radio(
            "Image Source",
            ["Gallery", "Upload"],
            horizontal=True,
        )

        selected_image = None
        uploaded_image = None
        puzzle_id = None

        if image_source_type == "Gallery":
            available_images = get_available_images()
            if available_images:
                image_names = [img.name for img in available_images]
                selected_name = st.selectbox("Select Image", image_names, index=0)
                selected_image = PROJECT_ROOT / "images" / selected_name
                puzzle_id = f"gallery/{selected_image.stem}"

                with st.expander("Preview", expanded=True):
                    st.image(Image.open(selected_image), use_container_width=True)
            else:
                st.warning("No images found in the 'images' directory.")
        else:
            uploaded_file = st.file_uploader(
                "Upload an image",
                type=["jpg", "jpeg", "png", "webp"],
            )
            if uploaded_file:
                uploaded_image = Image.open(uploaded_file).convert("RGB")
                st.image(uploaded_image, use_container_width=True)

        st.divider()

        game_type = st.radio("Puzzle Type", ["jigsaw", "slide"], horizontal=True)
        levels = DIFFICULTY_LEVELS[game_type]
        difficulty = st.selectbox(
            "Difficulty",
            levels,
            index=levels.index(DEFAULT_DIFFICULTY[game_type]),
            format_func=lambda n: f"{n} x {n}",
        )

        st.subheader("Play Area")
        col1, col2 = st.columns(2)
        with col1:
            width = st.number_input("Width", min_value=200, max_value=4000, value=1000)
        with col2:
            height = st.number_input("Height", min_value=200, max_value=4000, value=700)

        use_seed = st.checkbox("Use fixed seed (reproducible shuffle)")
        seed = None
        if use_seed:
            seed = st.number_input("Seed", min_value=0, value=42)

        st.divider()

        can_start = selected_image is not None or uploaded_image is not None

        if st.button(
            "🎮 New Puzzle",
            type="primary",
            disabled=not can_start,
            use_container_width=True,
        ):
            reset_game()
            try:
                if image_source_type == "Gallery":
                    image = PuzzleImage.open(selected_image, resize_to=800)
                else:
                    image = PuzzleImage(uploaded_image, resize_to=800)
                st.session_state.image = image
                st.session_state.session = create_session(
                    image,
                    game_type,
                    difficulty,
                    Size(width, height),
                    puzzle_id,
                    st.session_state.best_times,
                    seed,
                )
                st.rerun()
            except Exception as e:
                st.error(f"Error creating puzzle: {e}")

    session: Optional[GameSession] = st.session_state.session
    image: Optional[PuzzleImage] = st.session_state.image

    if session is None or image is None:
        st.info("👈 Select an image and click 'New Puzzle' to begin!")

        with st.expander("📖 How to Play", expanded=True):
            st.markdown("""
            ### Sliding puzzle
            Click a tile next to the empty slot to slide it. Put every tile
            back in order to rebuild the picture.

            ### Jigsaw
            Pick a loose piece and drop it on the board. Pieces dropped close
            enough to their home snap into place. Every drop counts as a move.
            """)
        return

    # Keep the session in step with the sidebar settings
    if (session.game_type, session.difficulty) != (game_type, difficulty):
        session.change_game(game_type, difficulty)
    if session.container != Size(width, height):
        session.resize(Size(width, height))

    # Game controls
    col_start, col_pause, col_stop, col_restart = st.columns(4)
    with col_start:
        if st.button("▶️ Start", disabled=session.state != GameState.READY, use_container_width=True):
            session.start()
            st.rerun()
    with col_pause:
        label = "▶️ Resume" if session.state == GameState.PAUSED else "⏸️ Pause"
        if st.button(
            label,
            disabled=session.state not in (GameState.PLAYING, GameState.PAUSED),
            use_container_width=True,
        ):
            session.toggle_pause()
            st.rerun()
    with col_stop:
        if st.button(
            "⏹️ Stop",
            disabled=session.state not in (GameState.PLAYING, GameState.PAUSED),
            use_container_width=True,
        ):
            session.stop()
            st.rerun()
    with col_restart:
        if st.button("🔄 Restart", disabled=session.state == GameState.INITIAL, use_container_width=True):
            restart_game(session, st.session_state)
            st.rerun()

    if session.state == GameState.SOLVED:
        stats = session.final_stats
        if st.session_state.solved_message is None:
            st.session_state.solved_message = MOTIVATIONAL_MESSAGES[
                session.rng.randrange(len(MOTIVATIONAL_MESSAGES))
            ]
            st.balloons()
        st.success(
            f"🎉 **{st.session_state.solved_message}** "
            f"You solved the puzzle in {stats.moves} moves and {stats.time}!"
        )
        if st.button("🔁 Play Again"):
            play_again(session, st.session_state)
            st.rerun()

    if st.session_state.last_message:
        st.info(st.session_state.last_message)

    # Stats row
    stats = session.tick()
    col_stats = st.columns(4)
    with col_stats[0]:
        st.metric("Moves", stats.moves)
    with col_stats[1]:
        st.metric("Time", stats.time)
    with col_stats[2]:
        st.metric("Best", session.best_times.formatted(session.game_type, session.difficulty))
    with col_stats[3]:
        st.metric("State", stats.state.title())

    st.divider()

    col_puzzle, col_reference = st.columns([3, 1])

    with col_puzzle:
        st.subheader("🧩 Puzzle")
        st.image(render_board(session, image), use_container_width=True)

    with col_reference:
        st.subheader("🖼️ Reference")
        st.image(image.get_original_image(), use_container_width=True)

    st.divider()

    if session.game_type == "slide":
        slide_controls(session)
    else:
        jigsaw_controls(session)


if __name__ == "__main__":
    main()
