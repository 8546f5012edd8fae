from app.models.user import User
from app.models.case_report import CaseReport
from app.models.water_test import WaterTest
from app.models.alert import Alert

__all__ = ["User", "CaseReport", "WaterTest", "Alert"]
