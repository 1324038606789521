from mobile_pk.infra.db.models.base import Base
from mobile_pk.infra.db.models.brand import BrandRow
from mobile_pk.infra.db.models.mobile import MobileRow
from mobile_pk.infra.db.models.price import MobilePriceRow

__all__ = ["Base", "BrandRow", "MobileRow", "MobilePriceRow"]
