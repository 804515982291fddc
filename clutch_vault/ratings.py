"""Fetch Clutch Ratings for many managers at once."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Iterable, Optional

from .api_client import APIError, ClutchAPIClient
from .config import get_max_workers

logger = logging.getLogger('clutch_vault.ratings')


def fetch_clutch_ratings(
    client: ClutchAPIClient,
    user_ids: Iterable[str],
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
) -> dict[str, Optional[dict[str, Any]]]:
    """
    Fetch ratings for several users in parallel.

    Each fetch is handled on its own: a user whose fetch fails, or who has
    no rating yet, maps to None and does not affect the others. Setting
    cancel_event discards the results (the caller has gone away); requests
    already in flight still complete.

    Args:
        client: API client shared by the workers
        user_ids: Users to fetch (duplicates are fetched once)
        max_workers: Thread pool size (default: config max_workers)
        cancel_event: Optional flag checked before results are returned

    Returns:
        Dict of user_id -> the clutchRating object, or None where the fetch
        failed or the user has no rating
    """
    unique_ids = list(dict.fromkeys(uid for uid in user_ids if uid))
    if not unique_ids:
        return {}

    workers = min(max_workers or get_max_workers(), len(unique_ids))
    results: dict[str, Optional[dict[str, Any]]] = {}

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(client.get_clutch_rating, uid): uid for uid in unique_ids}

        for future in as_completed(futures):
            uid = futures[future]
            try:
                rating = future.result()
            except APIError as e:
                logger.warning(f'Could not fetch Clutch Rating for {uid}: {e}')
                rating = None
            else:
                if rating is None:
                    logger.debug(f'No Clutch Rating yet for {uid}')
            results[uid] = rating

    if cancel_event is not None and cancel_event.is_set():
        logger.debug('Rating fetch cancelled, discarding results')
        return {}

    return {uid: results.get(uid) for uid in unique_ids}
