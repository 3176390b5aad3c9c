import sys
from pathlib import Path

import streamlit as st
import streamlit.components.v1 as components

# Add the project root to the path so `streamlit run src/dashboard/app.py` can import src.*
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.append(str(project_root))

from src.config.env import init_environment, load_config
from src.dashboard.helpers import (
    DELETE_AFTER_DAYS_MAX,
    DELETE_AFTER_DAYS_MIN,
    current_video_id,
    describe_live_input,
    live_inputs_frame,
    load_watch_state,
    parse_delete_after_days,
    require_input_id,
    require_stream_name,
    status_label,
)
from src.utils.logger import setup_logger
from src.utils.result import ConfigError, InputValidationError, error_message
from src.utils.stream_api import RECORDING_MODES, StreamAPIClient
from src.utils.stream_urls import generate_stream_urls

logger = setup_logger(__name__)

# Initialize environment variables (works with or without .env file)
init_environment()


@st.cache_resource
def get_client():
    """One client per server process; the configuration is read once."""
    config = load_config()
    logger.info(f"Stream API client configured: {config.redacted()}")
    return StreamAPIClient(config)


def show_stream_urls(urls):
    if urls.error:
        st.warning(urls.error)
        return
    for label, url in (("Player (iframe)", urls.player_url), ("HLS manifest", urls.hls_url),
                       ("DASH manifest", urls.dash_url), ("Watch page", urls.watch_url)):
        st.markdown(f"**{label}**")
        st.code(url, language=None)


def show_rtmps(info):
    if not info["rtmps_url"]:
        return
    st.markdown("**RTMPS URL**")
    st.code(info["rtmps_url"], language=None)
    st.markdown("**Stream key** (keep this secret)")
    st.code(info["stream_key"] or "", language=None)


def display_create_tab(client):
    st.subheader("Create Live Input")

    with st.form("create_live_input", clear_on_submit=True):
        name = st.text_input("Stream Name *", placeholder="Enter a name for your live stream")
        recording_mode = st.selectbox(
            "Recording Mode",
            RECORDING_MODES,
            format_func=lambda m: {
                "automatic": "Automatic (Record and make available for playback)",
                "off": "Off (Live only, no recording)",
            }[m],
        )
        require_signed = st.checkbox("Require signed URLs for playback")
        low_latency = st.checkbox("Prefer low latency (beta)")
        delete_after = st.text_input(
            "Auto-delete recordings after (days)",
            placeholder=f"Leave empty to keep forever (min: {DELETE_AFTER_DAYS_MIN}, max: {DELETE_AFTER_DAYS_MAX})",
        )
        submitted = st.form_submit_button("Create Live Input")

    if not submitted:
        return

    try:
        form = {
            "name": require_stream_name(name),
            "recordingMode": recording_mode,
            "requireSignedURLs": require_signed,
            "preferLowLatency": low_latency,
            "deleteRecordingAfterDays": parse_delete_after_days(delete_after),
        }
    except InputValidationError as e:
        st.error(str(e))
        return

    with st.spinner("Creating live input..."):
        result = client.create_live_input(form)

    if not result.success:
        st.error(f"Failed to create live input: {error_message(result)}")
        return

    info = describe_live_input(result.data or {})
    st.success(f"Live input created: {info['name']} ({info['uid']})")
    show_rtmps(info)
    show_stream_urls(generate_stream_urls(info["uid"], config=client.config))
    st.session_state.live_inputs = None


def display_live_inputs_tab(client):
    header, refresh = st.columns([4, 1])
    if refresh.button("Refresh") or st.session_state.get("live_inputs") is None:
        with st.spinner("Loading live inputs..."):
            result = client.list_live_inputs()
        if result.success:
            st.session_state.live_inputs = result.data
            st.session_state.live_inputs_error = None
        else:
            st.session_state.live_inputs_error = error_message(result)

    if st.session_state.get("live_inputs_error"):
        st.error(f"Error: {st.session_state.live_inputs_error}")

    inputs = st.session_state.get("live_inputs") or []
    header.subheader(f"Live Inputs ({len(inputs)})")

    if not inputs:
        st.info("No live inputs found. Create your first live input to get started!")
        return

    st.dataframe(live_inputs_frame(inputs), use_container_width=True, hide_index=True)

    for live_input in inputs:
        info = describe_live_input(live_input)
        with st.expander(f"{info['name']} - {info['uid']}"):
            st.write(f"**Created:** {info['created']}  \n**Modified:** {info['modified']}")
            st.write(f"**Recording Mode:** {info['recording_mode']}")
            if info["require_signed_urls"]:
                st.write("**Requires Signed URLs:** Yes")
            if info["prefer_low_latency"]:
                st.write("**Low Latency:** Enabled")
            show_rtmps(info)
            show_stream_urls(generate_stream_urls(info["uid"], config=client.config))

            pending = st.session_state.get("pending_delete")
            if pending != info["uid"]:
                if st.button("Delete", key=f"delete_{info['uid']}"):
                    st.session_state.pending_delete = info["uid"]
                    st.rerun()
                continue

            st.warning(f'Are you sure you want to delete "{info["name"]}"? This action cannot be undone.')
            confirm, cancel = st.columns(2)
            if confirm.button("Yes, delete", key=f"confirm_{info['uid']}"):
                result = client.delete_live_input(info["uid"])
                st.session_state.pending_delete = None
                if result.success:
                    st.session_state.live_inputs = None
                    st.toast("Live input deleted successfully")
                    st.rerun()
                else:
                    # Keep the list as-is so it still matches the last known remote state
                    st.error(f"Failed to delete live input: {error_message(result)}")
            if cancel.button("Cancel", key=f"cancel_{info['uid']}"):
                st.session_state.pending_delete = None
                st.rerun()


def display_watch_tab(client):
    st.subheader("Watch Stream")
    raw_id = st.text_input("Live Input ID or Video ID *", placeholder="Enter Live Input ID or Video ID")
    player_type = st.selectbox("Player Type", ["Cloudflare Stream Player", "HLS (Custom Player)"])

    load, refresh = st.columns(2)
    if load.button("Load Stream"):
        try:
            input_id = require_input_id(raw_id)
        except InputValidationError as e:
            st.error(str(e))
            return
        with st.spinner("Loading stream information..."):
            st.session_state.watch = load_watch_state(client, input_id)

    watch = st.session_state.get("watch")
    if not watch:
        return

    urls = watch["urls"]
    if urls.error:
        st.error(urls.error)
        return

    if refresh.button("Refresh Status"):
        watch["status"] = client.get_live_input_status(watch["input_id"])

    status = watch["status"]
    if status.success:
        st.markdown(f"**Status:** {status_label(status.data)}")
        video_id = current_video_id(status.data)
        if video_id:
            st.markdown("**Current Video ID**")
            st.code(video_id, language=None)
    else:
        st.caption(f"Status unavailable: {error_message(status)}")

    if player_type.startswith("Cloudflare"):
        components.iframe(urls.player_url, height=480)
    else:
        st.video(urls.hls_url)

    show_stream_urls(urls)

    videos = watch["videos"]
    if videos.success and videos.data:
        st.markdown(f"**Recorded videos ({len(videos.data)})**")
        for video in videos.data:
            uid = video.get("uid", "")
            name = (video.get("meta") or {}).get("name") or uid
            st.write(f"- {name}: `{uid}` ({(video.get('status') or {}).get('state', 'unknown')})")


def main():
    st.set_page_config(page_title="Cloudflare Stream Live", page_icon="📡", layout="wide")
    st.title("Cloudflare Stream Live")
    st.caption("Create and watch live streams")

    try:
        client = get_client()
    except ConfigError as e:
        logger.error(str(e))
        st.error(f"{e}. Add them to your environment or .env file and restart.")
        st.stop()

    create_tab, list_tab, watch_tab = st.tabs(["Create Live Input", "Live Inputs", "Watch Stream"])
    with create_tab:
        display_create_tab(client)
    with list_tab:
        display_live_inputs_tab(client)
    with watch_tab:
        display_watch_tab(client)


main()
