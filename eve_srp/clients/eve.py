"""EVE SSO and ESI client"""
from typing import Tuple

import requests

from eve_srp.config import Settings
from eve_srp.errors import AuthExchangeFailed
from eve_srp.utils.logger import logger


class EveSsoClient:
    """OAuth code exchange, token verification and public character lookups.

    One instance is created at startup and shared through ``app.state``; every
    call carries ``EXTERNAL_TIMEOUT_SECONDS``. Provider error bodies are logged,
    never returned; all failures surface as :class:`AuthExchangeFailed`.
    """

    def __init__(self, config: Settings, session: requests.Session = None):
        self._config = config
        self._timeout = config.EXTERNAL_TIMEOUT_SECONDS
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": config.HTTP_USER_AGENT})

    def close(self) -> None:
        self._session.close()

    def _fail(self, step: str, exc: Exception) -> AuthExchangeFailed:
        body = ""
        response = getattr(exc, "response", None)
        if response is not None:
            body = response.text[:500]
        logger.warning(
            f"EVE SSO {step} failed: {exc}",
            extra={"action": f"sso_{step}", "upstream": body},
        )
        return AuthExchangeFailed()

    def exchange_code(self, code: str) -> str:
        """Trade an authorization code for an access token"""
        try:
            resp = self._session.post(
                self._config.EVE_SSO_TOKEN_URL,
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": self._config.EVE_CALLBACK_URL,
                },
                auth=(self._config.EVE_CLIENT_ID, self._config.EVE_SECRET_KEY),
                timeout=self._timeout,
            )
            resp.raise_for_status()
            return resp.json()["access_token"]
        except (requests.RequestException, ValueError, KeyError) as exc:
            raise self._fail("token_exchange", exc)

    def verify(self, access_token: str) -> Tuple[int, str]:
        """Resolve the character behind an access token"""
        try:
            resp = self._session.get(
                self._config.EVE_SSO_VERIFY_URL,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            data = resp.json()
            return int(data["CharacterID"]), str(data["CharacterName"])
        except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
            raise self._fail("verify", exc)

    def get_corporation_id(self, char_id: int) -> int:
        """Current corporation of a character from the public ESI directory"""
        try:
            resp = self._session.get(
                f"{self._config.ESI_BASE_URL}/characters/{char_id}/",
                timeout=self._timeout,
            )
            resp.raise_for_status()
            return int(resp.json()["corporation_id"])
        except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
            raise self._fail("affiliation", exc)
