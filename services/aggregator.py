# aggregator.py
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from models.panchang import AlmanacRecord
from services import config
from services.astrology_client import AstrologyClient, FetchError, FetchResult
from services.endpoints import COMPLETE_ENDPOINT, CONSUMED_ENDPOINTS, SUB_ENDPOINTS, Endpoint
from services.merger import merge_fields

logger = logging.getLogger(__name__)

# Extra time granted on top of the HTTP timeout before a worker is abandoned
DEADLINE_GRACE_SEC = 2.0


class AggregationError(RuntimeError):
    pass


def parse_endpoint(endpoint: Endpoint, body: Any) -> Dict[str, Any]:
    """Run one endpoint parser, keeping only the fields it declares.

    A malformed payload counts as missing data.
    """
    try:
        parsed = endpoint.parser(body)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Discarding malformed %s payload: %s", endpoint.name, e)
        return {}
    return {k: v for k, v in parsed.items() if k in endpoint.targets and v is not None}


def collect_fields(endpoints: Iterable[Endpoint], bodies: Dict[str, Any]) -> Dict[str, Any]:
    partial: Dict[str, Any] = {}
    for endpoint in endpoints:
        if endpoint.consumed and endpoint.name in bodies:
            partial.update(parse_endpoint(endpoint, bodies[endpoint.name]))
    return partial


def _mark_started(started: asyncio.Future):
    if not started.done():
        started.set_result(None)


async def _fetch_bounded(
    client: AstrologyClient,
    path: str,
    payload: dict,
    semaphore: asyncio.Semaphore,
    deadline: float,
) -> FetchResult:
    loop = asyncio.get_running_loop()
    started = loop.create_future()

    def call():
        loop.call_soon_threadsafe(_mark_started, started)
        return client.fetch(path, payload)

    async with semaphore:
        future = loop.run_in_executor(client.executor, call)
        # The deadline runs from the moment a worker picks the call up
        await asyncio.wait((started, future), return_when=asyncio.FIRST_COMPLETED)
        try:
            return await asyncio.wait_for(future, deadline)
        except asyncio.TimeoutError:
            return FetchResult(path, error=FetchError.TIMEOUT, detail=f"no response within {deadline:.1f}s")


async def fan_out(
    client: AstrologyClient,
    payload: dict,
    endpoints: Iterable[Endpoint] = SUB_ENDPOINTS,
    max_concurrency: int = config.MAX_CONCURRENCY,
) -> Dict[str, FetchResult]:
    """Call every endpoint concurrently and wait for all of them to settle."""
    endpoints = list(endpoints)
    semaphore = asyncio.Semaphore(min(max_concurrency, client.max_workers))
    deadline = client.timeout + DEADLINE_GRACE_SEC
    results: List[FetchResult] = await asyncio.gather(
        *(_fetch_bounded(client, e.path, payload, semaphore, deadline) for e in endpoints)
    )
    return {e.name: r for e, r in zip(endpoints, results)}


async def fetch_panchang(payload: dict, client: Optional[AstrologyClient] = None) -> AlmanacRecord:
    """Fetch a panchang from the provider.

    Tries the aggregate endpoint first, then fans out to the individual
    endpoints and merges whatever came back. Raises AggregationError when
    none of the fields could be obtained. A client created here is closed
    before returning.
    """
    if client is not None:
        return await _aggregate(client, payload)
    client = AstrologyClient()
    try:
        return await _aggregate(client, payload)
    finally:
        client.close()


async def _aggregate(client: AstrologyClient, payload: dict) -> AlmanacRecord:
    loop = asyncio.get_running_loop()
    complete = await loop.run_in_executor(client.executor, client.fetch, COMPLETE_ENDPOINT.path, payload)
    if complete.ok:
        partial = collect_fields(CONSUMED_ENDPOINTS, {e.name: complete.data for e in CONSUMED_ENDPOINTS})
        if partial:
            return merge_fields(partial)
        logger.info("complete-panchang returned no usable fields, trying individual endpoints")
    else:
        logger.info(
            "complete-panchang failed (%s %s), trying individual endpoints",
            complete.error.value,
            complete.status_code or "",
        )

    results = await fan_out(client, payload)

    bodies = {}
    for name, result in results.items():
        if result.ok:
            bodies[name] = result.data
        else:
            logger.warning("Endpoint %s failed: %s %s", name, result.error.value, result.detail or "")

    partial = collect_fields(CONSUMED_ENDPOINTS, bodies)
    if not partial:
        raise AggregationError("No panchang data available from any provider endpoint")

    logger.info("Merged %d provider fields from %d/%d endpoints", len(partial), len(bodies), len(results))
    return merge_fields(partial)
