"""HTTP adapter for the upstream monitor API.

The dashboard calls a service's location "region"; the upstream API calls
it "type". The rename happens here and nowhere else.
"""

import random

import httpx
import structlog

from statusboard.core.exceptions import MutationError, PollError
from statusboard.services.telemetry.models import Service, ServiceDraft, Status
from statusboard.services.telemetry.normalizer import normalize_status

logger = structlog.get_logger()

MONITOR_PATH = "/monitor"
DEFAULT_UPTIME = 99.9
DEFAULT_REGION = "UNKNOWN"


def _synthesize_latency(status: Status, rng: random.Random) -> int:
    """Plausible latency for records that do not report one."""
    if status == Status.OPERATIONAL:
        return rng.randint(10, 69)
    if status == Status.DEGRADED:
        return rng.randint(100, 299)
    return 0


def service_from_record(
    record: dict,
    empty_default: Status = Status.DEGRADED,
    rng: random.Random | None = None,
) -> Service:
    """Convert one upstream monitor record into a Service.

    Raises PollError for records the dashboard cannot key (not an object,
    or no id).
    """
    if not isinstance(record, dict) or record.get("id") in (None, ""):
        raise PollError("Malformed monitor record.", details={"record": repr(record)[:200]})

    rng = rng or random
    status = normalize_status(record.get("status"), empty_default)
    service_id = str(record["id"])

    latency = record.get("latency")
    if status == Status.OFFLINE:
        latency = 0
    elif isinstance(latency, (int, float)) and not isinstance(latency, bool):
        latency = max(0, int(latency))
    else:
        latency = _synthesize_latency(status, rng)

    uptime = record.get("uptime")
    if isinstance(uptime, (int, float)) and not isinstance(uptime, bool):
        uptime = min(100.0, max(0.0, float(uptime)))
    else:
        uptime = DEFAULT_UPTIME

    region = record.get("type") or record.get("region") or DEFAULT_REGION

    return Service(
        id=service_id,
        name=str(record.get("name") or service_id),
        status=status,
        latency=latency,
        uptime=uptime,
        region=str(region),
    )


def is_header_safe(value: str) -> bool:
    """True when a credential can travel in an HTTP header as-is (printable ASCII)."""
    return bool(value) and value.isascii() and value.isprintable()


def draft_to_payload(draft: ServiceDraft) -> dict:
    return {"name": draft.name, "type": draft.region, "status": draft.status.value}


class UpstreamClient:
    """Thin async client for the monitor endpoints of the remote backend."""

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        auth_scheme: str = "",
    ):
        self.base_url = base_url.rstrip("/")
        self._auth_scheme = auth_scheme.strip()
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(connect=5.0, read=10.0, write=5.0, pool=5.0)
        )

    def _headers(self, credential: str) -> dict[str, str]:
        value = f"{self._auth_scheme} {credential}" if self._auth_scheme else credential
        return {"Authorization": value}

    async def list_monitors(self, credential: str) -> list[dict]:
        """GET the full monitor list. Any failure or non-list body is a PollError."""
        url = f"{self.base_url}{MONITOR_PATH}"
        try:
            response = await self._client.get(url, headers=self._headers(credential))
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise PollError(f"Monitor API returned {e.response.status_code}.")
        except httpx.HTTPError as e:
            raise PollError(f"Cannot reach monitor API at {self.base_url}: {e}")
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            raise PollError(f"Cannot build monitor request: {e}")
        except ValueError:
            raise PollError("Monitor API returned invalid JSON.")

        if not isinstance(data, list):
            raise PollError("Monitor API returned a non-list body.", details={"type": type(data).__name__})
        return data

    async def create_monitor(self, draft: ServiceDraft, credential: str) -> str | None:
        """POST a new monitor. Returns the server-assigned id when the body carries one."""
        response = await self._write("POST", MONITOR_PATH, credential, json=draft_to_payload(draft))
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get("id") not in (None, ""):
            return str(body["id"])
        return None

    async def update_monitor(self, service_id: str, draft: ServiceDraft, credential: str) -> None:
        await self._write("PUT", f"{MONITOR_PATH}/{service_id}", credential, json=draft_to_payload(draft))

    async def delete_monitor(self, service_id: str, credential: str) -> None:
        await self._write("DELETE", f"{MONITOR_PATH}/{service_id}", credential)

    async def _write(self, method: str, path: str, credential: str, json: dict | None = None) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(method, url, json=json, headers=self._headers(credential))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MutationError(
                f"Monitor API rejected {method} {path}.",
                details={"upstream_status": e.response.status_code},
            )
        except httpx.HTTPError as e:
            raise MutationError(f"Cannot reach monitor API at {self.base_url}: {e}")
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            raise MutationError(f"Cannot build monitor request: {e}")
        return response

    async def close(self):
        """Close the underlying HTTP client."""
        await self._client.aclose()
