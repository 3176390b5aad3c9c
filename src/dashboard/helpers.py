"""
Helper functions for rendering live inputs in the dashboard.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from src.utils.result import InputValidationError
from src.utils.stream_urls import generate_stream_urls

DELETE_AFTER_DAYS_MIN = 30
DELETE_AFTER_DAYS_MAX = 1096

TABLE_COLUMNS = ["Name", "ID", "Created", "Modified", "Recording", "Signed URLs", "Low Latency"]


def require_input_id(value: Optional[str]) -> str:
    """Strip the id typed into the viewer; blank ids never reach the API."""
    input_id = (value or "").strip()
    if not input_id:
        raise InputValidationError("Please enter a valid Input ID")
    return input_id


def require_stream_name(value: Optional[str]) -> str:
    name = (value or "").strip()
    if not name:
        raise InputValidationError("Stream name is required")
    return name


def parse_delete_after_days(value: Optional[str]) -> Optional[int]:
    """
    Parse the auto-delete field. Blank means keep recordings forever.

    The 30..1096 bound is only a hint in the form; the API enforces it.
    """
    text = (value or "").strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise InputValidationError(f"Auto-delete days must be a whole number, got '{text}'")


def format_date(value: Optional[str]) -> str:
    """Format an API timestamp like 2024-05-01T12:00:00.000Z for display"""
    if not value:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return str(value)
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def describe_live_input(live_input: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a live input into the fields shown on its card."""
    meta = live_input.get("meta") or {}
    recording = live_input.get("recording") or {}
    rtmps = live_input.get("rtmps") or {}
    uid = live_input.get("uid", "")

    return {
        "uid": uid,
        "name": meta.get("name") or "Untitled Stream",
        "created": format_date(live_input.get("created")),
        "modified": format_date(live_input.get("modified")),
        "recording_mode": recording.get("mode") or "off",
        "require_signed_urls": bool(recording.get("requireSignedURLs")),
        "prefer_low_latency": bool(live_input.get("preferLowLatency")),
        "delete_recording_after_days": live_input.get("deleteRecordingAfterDays"),
        "rtmps_url": rtmps.get("url"),
        "stream_key": rtmps.get("streamKey"),
    }


def live_inputs_frame(inputs: List[Dict[str, Any]]) -> pd.DataFrame:
    rows = []
    for live_input in inputs:
        info = describe_live_input(live_input)
        rows.append({
            "Name": info["name"],
            "ID": info["uid"],
            "Created": info["created"],
            "Modified": info["modified"],
            "Recording": info["recording_mode"],
            "Signed URLs": "Yes" if info["require_signed_urls"] else "No",
            "Low Latency": "Enabled" if info["prefer_low_latency"] else "Disabled",
        })
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def status_label(status: Optional[Dict[str, Any]]) -> str:
    if not status:
        return "Unknown"
    return "🔴 LIVE" if status.get("live") else "⚫ Offline"


def current_video_id(status: Optional[Dict[str, Any]]) -> Optional[str]:
    """videoUID of the broadcast in progress, when the lifecycle endpoint reports one."""
    if not status:
        return None
    return status.get("videoUID") or None


def load_watch_state(client, input_id: str) -> Dict[str, Any]:
    """
    Fetch what the Watch Stream tab shows for one id.

    The dict is kept in session state so the player survives reruns; a missing
    customer code short-circuits before any request is made.
    """
    urls = generate_stream_urls(input_id, config=client.config)
    state = {"input_id": input_id, "urls": urls, "status": None, "videos": None}
    if urls.error:
        return state
    state["status"] = client.get_live_input_status(input_id)
    state["videos"] = client.list_live_input_videos(input_id)
    return state
