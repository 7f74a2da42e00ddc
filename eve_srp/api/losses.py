"""Loss history lookup for the authenticated character"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from eve_srp.api.deps import PlayerContext, get_loss_source, require_owner

router = APIRouter(tags=["losses"])


@router.get("/losses/{char_id}", response_model=List[Dict[str, Any]])
def list_losses(
    char_id: int,
    player: PlayerContext = Depends(require_owner),
    loss_source=Depends(get_loss_source),
):
    """Recent losses of the caller's character, as returned by the loss source."""
    return loss_source.fetch_losses(player.char_id)
