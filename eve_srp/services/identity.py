"""Identity gateway: OAuth login for corporation members"""
from typing import Dict, Protocol, Tuple

from eve_srp.config import settings
from eve_srp.errors import ForbiddenNotMember
from eve_srp.utils.jwt_utils import create_player_token
from eve_srp.utils.logger import logger


class SsoClient(Protocol):
    def exchange_code(self, code: str) -> str: ...

    def verify(self, access_token: str) -> Tuple[int, str]: ...

    def get_corporation_id(self, char_id: int) -> int: ...


def exchange_code(client: SsoClient, code: str) -> Dict[str, object]:
    """Turn an authorization code into a player session.

    Membership is checked against ``TARGET_CORP_ID`` on every login; nothing is
    persisted, the signed token is the only record of the session.

    Raises:
        AuthExchangeFailed: any SSO/ESI failure (raised by the client).
        ForbiddenNotMember: the character is in another corporation.
    """
    access_token = client.exchange_code(code)
    char_id, char_name = client.verify(access_token)
    corp_id = client.get_corporation_id(char_id)

    if corp_id != settings.TARGET_CORP_ID:
        logger.info(
            f"Login refused for non-member {char_name}",
            extra={"char_id": char_id, "action": "login_player"},
        )
        raise ForbiddenNotMember()

    token = create_player_token(char_id, char_name, corp_id)
    logger.info(f"Player logged in: {char_name}", extra={"char_id": char_id, "action": "login_player"})
    return {"charId": char_id, "charName": char_name, "token": token}
