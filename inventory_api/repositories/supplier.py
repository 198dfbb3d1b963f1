from inventory_api.models.supplier import Supplier
from inventory_api.repositories.base import BaseRepository

class SupplierRepository(BaseRepository[Supplier]):
    pass
