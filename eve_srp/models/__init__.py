"""Database models"""
from eve_srp.models.admin import Admin
from eve_srp.models.srp_request import SRP_STATUSES, SrpRequest

__all__ = ["Admin", "SrpRequest", "SRP_STATUSES"]
