"""Outbound HTTP clients"""
from eve_srp.clients.eve import EveSsoClient
from eve_srp.clients.zkillboard import ZKillboardLossSource

__all__ = ["EveSsoClient", "ZKillboardLossSource"]
