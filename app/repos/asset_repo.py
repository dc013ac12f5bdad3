"""Repository for Asset data access."""

from app.api.schemas.asset import AssetCreate, AssetUpdate
from app.db.models import Asset, Department, Employee
from app.repos.base import CrudRepository


class AssetRepository(CrudRepository[Asset, AssetCreate, AssetUpdate]):
    """
    Assets reference an owning Department (proprietor) and the Employee
    currently holding them (custodian).
    """

    model = Asset
    resource = "assets"
    filterable = frozenset({"proprietor_id", "custodian_id", "is_active"})
    references = {"proprietor_id": Department, "custodian_id": Employee}
