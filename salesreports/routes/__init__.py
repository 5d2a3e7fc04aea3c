from salesreports.routes.reports import router as reports_router
from salesreports.routes.admin_reports import router as admin_reports_router
from salesreports.routes.photos import router as photos_router
from salesreports.routes.regions import router as regions_router
from salesreports.routes.directors import router as directors_router
from salesreports.routes.rep_firms import router as rep_firms_router
from salesreports.routes.customers import router as customers_router
from salesreports.routes.consolidated import router as consolidated_router
from salesreports.routes.summaries import router as summaries_router

__all__ = [
    'reports_router',
    'admin_reports_router',
    'photos_router',
    'regions_router',
    'directors_router',
    'rep_firms_router',
    'customers_router',
    'consolidated_router',
    'summaries_router',
]
