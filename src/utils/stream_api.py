"""
Cloudflare Stream API client for managing live inputs.

Each method is a single HTTP call that returns Ok(data) or Err(kind, error);
nothing raises past the method boundary for expected failures.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from src.config.env import StreamConfig
from src.utils.logger import setup_logger
from src.utils.result import (
    Ok, Err, ErrorKind, OperationResult, InputValidationError, RemoteRequestError, StreamPanelError,
)
from src.utils.stream_urls import CUSTOMER_CODE_MISSING

logger = setup_logger(__name__)

RECORDING_MODES = ("automatic", "off")

# Form field name -> LiveInputRequest attribute
_FORM_FIELDS = {
    "name": "name",
    "recordingMode": "recording_mode",
    "requireSignedURLs": "require_signed_urls",
    "preferLowLatency": "prefer_low_latency",
    "deleteRecordingAfterDays": "delete_recording_after_days",
    "allowedOrigins": "allowed_origins",
}


@dataclass
class LiveInputRequest:
    """Fields accepted by POST /live_inputs. Falsy values mean "use the default"."""

    name: Optional[str] = None
    recording_mode: Optional[str] = None
    require_signed_urls: bool = False
    prefer_low_latency: bool = False
    # None keeps recordings forever; the API accepts 30..1096 and validates it
    delete_recording_after_days: Optional[int] = None
    allowed_origins: Optional[List[str]] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LiveInputRequest":
        """Accept either the camelCase form keys or the snake_case attribute names."""
        kwargs = {}
        for key, value in data.items():
            attr = _FORM_FIELDS.get(key, key)
            if attr not in cls.__dataclass_fields__:
                raise InputValidationError(f"Unknown live input field: {key}")
            kwargs[attr] = value
        return cls(**kwargs)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "meta": {
                "name": self.name or "Live Stream",
            },
            "recording": {
                "mode": self.recording_mode or "automatic",
                "requireSignedURLs": self.require_signed_urls or False,
                "allowedOrigins": self.allowed_origins or None,
            },
            "deleteRecordingAfterDays": self.delete_recording_after_days or None,
            "preferLowLatency": self.prefer_low_latency or False,
        }


def extract_error_message(error: Exception) -> str:
    """
    Prefer the first message of the API's ``errors`` array, falling back
    to the exception text.
    """
    response = getattr(error, "response", None)
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            errors = body.get("errors") or []
            if errors and isinstance(errors[0], dict) and errors[0].get("message"):
                return errors[0]["message"]
    return str(error)


class StreamAPIClient:
    """Client for the Cloudflare Stream live input endpoints."""

    def __init__(self, config: StreamConfig, session: Optional[requests.Session] = None):
        """
        Validate the configuration and prepare an authenticated session.

        Raises:
            ConfigError: if the account ID or API token is missing
        """
        config.validate()
        self.config = config
        self.base_url = config.stream_api_url
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {config.api_token}",
            "Content-Type": "application/json",
        })

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _call(self, action: str, method: str, path: str, **kwargs) -> OperationResult[Any]:
        """Send one request to the Stream API and unwrap the ``result`` field."""
        try:
            logger.debug(f"{method} {path}")
            response = self.session.request(method, self._url(path), **kwargs)
            response.raise_for_status()
            if not response.content:
                return Ok(None)
            body = response.json()
            if not isinstance(body, dict):
                raise RemoteRequestError(f"Unexpected response body from {path}")
            return Ok(body.get("result"))
        except requests.exceptions.RequestException as e:
            message = extract_error_message(e)
            logger.error(f"Error {action}: {message}")
            return Err(ErrorKind.REMOTE_REQUEST, message)
        except StreamPanelError as e:
            logger.error(f"Error {action}: {e}")
            return Err.from_exception(e)
        except Exception as e:
            logger.error(f"Unexpected error {action}: {e}", exc_info=True)
            return Err(ErrorKind.REMOTE_REQUEST, str(e))

    def create_live_input(self, input_data: Union[LiveInputRequest, Mapping[str, Any], None] = None,
                          **fields) -> OperationResult[Dict[str, Any]]:
        """
        Create a new live input.

        Args:
            input_data: LiveInputRequest or form mapping; omitted fields use defaults
            **fields: Same fields as keyword arguments

        Returns:
            Ok with the created live input (uid, rtmps credentials, ...) or Err
        """
        if isinstance(input_data, LiveInputRequest):
            request = input_data
        else:
            merged = dict(input_data or {})
            merged.update(fields)
            try:
                request = LiveInputRequest.from_mapping(merged)
            except InputValidationError as e:
                return Err.from_exception(e)

        payload = request.to_payload()
        result = self._call("creating live input", "POST", "/live_inputs", json=payload)
        if result.success:
            logger.info(f"Created live input {result.data.get('uid') if result.data else None} "
                        f"({payload['meta']['name']})")
        return result

    def list_live_inputs(self) -> OperationResult[List[Dict[str, Any]]]:
        """Get all live inputs on the account."""
        result = self._call("fetching live inputs", "GET", "/live_inputs")
        if result.success and result.data is None:
            return Ok([])
        return result

    def get_live_input(self, input_id: str) -> OperationResult[Dict[str, Any]]:
        """Get a specific live input."""
        return self._call("fetching live input", "GET", f"/live_inputs/{input_id}")

    def list_live_input_videos(self, input_id: str) -> OperationResult[List[Dict[str, Any]]]:
        """Get the recordings produced by a live input."""
        result = self._call("fetching live input videos", "GET", f"/live_inputs/{input_id}/videos")
        if result.success and result.data is None:
            return Ok([])
        return result

    def get_live_input_status(self, input_id: str) -> OperationResult[Dict[str, Any]]:
        """
        Check whether a live input is currently broadcasting.

        Uses the public lifecycle endpoint on the customer subdomain, which
        takes no Authorization header, so this bypasses the API session.

        Returns:
            Ok({"live": bool, "videoUID": str | None, ...}) or Err
        """
        if not self.config.customer_code:
            logger.error(f"Error checking live input status: {CUSTOMER_CODE_MISSING}")
            return Err.from_exception(InputValidationError(CUSTOMER_CODE_MISSING))

        url = f"{self.config.customer_host()}/{input_id}/lifecycle"
        try:
            response = requests.get(url)
            response.raise_for_status()
            return Ok(response.json())
        except requests.exceptions.RequestException as e:
            message = extract_error_message(e)
            logger.error(f"Error checking live input status: {message}")
            return Err(ErrorKind.REMOTE_REQUEST, message)
        except Exception as e:
            logger.error(f"Unexpected error checking live input status: {e}", exc_info=True)
            return Err(ErrorKind.REMOTE_REQUEST, str(e))

    def delete_live_input(self, input_id: str) -> OperationResult[None]:
        """Delete a live input. Recordings already made are kept."""
        result = self._call("deleting live input", "DELETE", f"/live_inputs/{input_id}")
        if result.success:
            logger.info(f"Deleted live input {input_id}")
            return Ok(None)
        return result
