# Import all models to ensure they are registered with SQLAlchemy
from .companies import Company
from .categories import Category
from .employees import Employee
from .server_accounts import ServerAccount
from .assets import Asset
from .asset_codes import AssetCode
from .batch_tags import BatchTag
