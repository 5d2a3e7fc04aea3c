from salesreports.models.region import Region
from salesreports.models.director import Director
from salesreports.models.master_data import RepFirmMaster, CustomerMaster
from salesreports.models.report import Report
from salesreports.models.report_sections import (
    Win,
    RepFirm,
    Competitor,
    GoodJob,
    Photo,
    RegionalPerformance,
    KeyInitiatives,
    MarketingEvents,
    MarketTrends,
    FollowUp,
)
from salesreports.models.edit_history import ReportEditHistory
from salesreports.models.global_summary import GlobalSummary
from salesreports.models.director_access import (
    DirectorRegionAccess,
    DirectorRepAccess,
    DirectorCustomerAccess,
    DirectorChannelConfig,
)

__all__ = [
    "Region",
    "Director",
    "RepFirmMaster",
    "CustomerMaster",
    "Report",
    "Win",
    "RepFirm",
    "Competitor",
    "GoodJob",
    "Photo",
    "RegionalPerformance",
    "KeyInitiatives",
    "MarketingEvents",
    "MarketTrends",
    "FollowUp",
    "ReportEditHistory",
    "GlobalSummary",
    "DirectorRegionAccess",
    "DirectorRepAccess",
    "DirectorCustomerAccess",
    "DirectorChannelConfig",
]
