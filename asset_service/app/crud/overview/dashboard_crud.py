from decimal import Decimal
from sqlalchemy.orm import Session, joinedload

from ...models.assets import Asset

UNKNOWN_COMPANY = "Unknown"


def get_dashboard_summary(db: Session):
    assets = (
        db.query(Asset)
        .options(joinedload(Asset.company), joinedload(Asset.category))
        .filter(Asset.is_deleted == False)
        .order_by(Asset.created_at.asc(), Asset.id.asc())
        .all()
    )

    total_cost = Decimal("0")
    groups = {}  # keyed by company_id, first seen company first

    for asset in assets:
        cost = asset.cost if asset.cost is not None else Decimal("0")
        total_cost += cost

        company_name = asset.company.name if asset.company else UNKNOWN_COMPANY
        group = groups.setdefault(asset.company_id, {
            "company": company_name,
            "asset_count": 0,
            "total_cost": Decimal("0"),
            "categories": [],
        })
        group["asset_count"] += 1
        group["total_cost"] += cost

        category_name = asset.category.name if asset.category else None
        if category_name and category_name not in group["categories"]:
            group["categories"].append(category_name)

    return {
        "totalAssets": len(assets),
        "totalCost": float(total_cost),
        "byCompany": [
            {
                **group,
                "total_cost": float(group["total_cost"]),
                "categories": ", ".join(group["categories"]),
            }
            for group in groups.values()
        ],
    }
