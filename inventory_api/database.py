import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorGridFSBucket
from inventory_api.config import settings
from inventory_api.repositories.counter import CounterRepository
from inventory_api.repositories.product import ProductRepository
from inventory_api.repositories.purchase_order import PurchaseOrderRepository
from inventory_api.repositories.sale import SaleRepository
from inventory_api.repositories.settings import SettingsRepository
from inventory_api.repositories.supplier import SupplierRepository
from inventory_api.repositories.taxonomy import TaxonomyRepository
from inventory_api.repositories.user import UserRepository
from inventory_api.models.product import Product
from inventory_api.models.purchase_order import PurchaseOrder
from inventory_api.models.sale import Sale
from inventory_api.models.settings import BusinessSettings
from inventory_api.models.supplier import Supplier
from inventory_api.models.taxonomy import Brand, Category
from inventory_api.models.user import User

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None
    fs: AsyncIOMotorGridFSBucket = None

    # Repositories
    products: ProductRepository = None
    purchase_orders: PurchaseOrderRepository = None
    counters: CounterRepository = None
    suppliers: SupplierRepository = None
    brands: TaxonomyRepository = None
    categories: TaxonomyRepository = None
    sales: SaleRepository = None
    users: UserRepository = None
    settings: SettingsRepository = None

    def connect(self):
        """Initialize database connection and repositories."""
        self.client = AsyncIOMotorClient(settings.MONGODB_URL)
        db = self.client[settings.DB_NAME]
        self.fs = AsyncIOMotorGridFSBucket(db, bucket_name="uploads")

        # Initialize repositories with their respective collections and models
        self.products = ProductRepository(db.products, Product)
        self.purchase_orders = PurchaseOrderRepository(db.purchase_orders, PurchaseOrder)
        self.counters = CounterRepository(db.counters)
        self.suppliers = SupplierRepository(db.suppliers, Supplier)
        self.brands = TaxonomyRepository(db.brands, Brand)
        self.categories = TaxonomyRepository(db.categories, Category)
        self.sales = SaleRepository(db.sales, Sale)
        self.users = UserRepository(db.users, User)
        self.settings = SettingsRepository(db.settings, BusinessSettings)

        logger.info(f"Connected to MongoDB ({settings.DB_NAME})")

    def close(self):
        """Close database connection."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")

db = Database()
