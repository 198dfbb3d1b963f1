from inventory_api.models.base import MongoModel, SoftDeleteModel
from inventory_api.models.product import Product, ProductPublic, Variant, ProductIn, VariantIn, build_variant_name
from inventory_api.models.purchase_order import PurchaseOrder, POStatus, LineItem, StatusHistoryEntry, VALID_TRANSITIONS
from inventory_api.models.supplier import Supplier, SupplierIn
from inventory_api.models.taxonomy import Brand, Category, TaxonomyIn
from inventory_api.models.sale import Sale, SaleItem, SaleCreate
from inventory_api.models.user import User, UserPublic, Role
from inventory_api.models.settings import BusinessSettings, PdfSettings
