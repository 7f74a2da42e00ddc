"""Loss source backed by zKillboard with ESI enrichment"""
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List

import requests

from eve_srp.config import Settings
from eve_srp.errors import LossSourceFailed
from eve_srp.utils.logger import logger


class ZKillboardLossSource:
    """Recent losses of a character.

    The loss list comes from zKillboard; each entry with a ``zkb.hash`` is then
    enriched from ESI with ``killmail_time`` and the victim ``ship_type_id``.
    Lookups run in parallel (``LOSS_ENRICH_WORKERS``) and results keep the
    zKillboard order. A failed enrichment keeps the raw entry; a failed list
    fetch raises :class:`LossSourceFailed`.
    """

    def __init__(self, config: Settings, session: requests.Session = None):
        self._config = config
        self._timeout = config.EXTERNAL_TIMEOUT_SECONDS
        self._limit = config.LOSS_FETCH_LIMIT
        self._workers = max(1, config.LOSS_ENRICH_WORKERS)
        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": config.HTTP_USER_AGENT,
            "Accept-Encoding": "gzip",
        })

    def close(self) -> None:
        self._session.close()

    def fetch_losses(self, char_id: int) -> List[Dict[str, Any]]:
        try:
            resp = self._session.get(
                f"{self._config.ZKILLBOARD_BASE_URL}/api/characterID/{char_id}/losses/",
                timeout=self._timeout,
            )
            resp.raise_for_status()
            losses = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning(f"zKillboard fetch failed: {exc}", extra={"char_id": char_id, "action": "fetch_losses"})
            raise LossSourceFailed()

        if not isinstance(losses, list):
            logger.warning("zKillboard returned a non-list payload", extra={"char_id": char_id})
            raise LossSourceFailed()

        losses = losses[: self._limit]
        if not losses:
            return []
        with ThreadPoolExecutor(max_workers=min(self._workers, len(losses))) as pool:
            return list(pool.map(self._enrich, losses))

    def _enrich(self, loss: Dict[str, Any]) -> Dict[str, Any]:
        killmail_id = loss.get("killmail_id")
        killmail_hash = (loss.get("zkb") or {}).get("hash")
        if not killmail_id or not killmail_hash:
            return loss

        try:
            resp = self._session.get(
                f"{self._config.ESI_BASE_URL}/killmails/{killmail_id}/{killmail_hash}/",
                timeout=self._timeout,
            )
            resp.raise_for_status()
            detail = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.info(f"ESI killmail lookup failed for {killmail_id}: {exc}", extra={"killmail_id": killmail_id})
            return loss

        enriched = dict(loss)
        enriched["killmail_time"] = detail.get("killmail_time")
        enriched["ship_type_id"] = (detail.get("victim") or {}).get("ship_type_id") or loss.get("ship_type_id")
        return enriched
