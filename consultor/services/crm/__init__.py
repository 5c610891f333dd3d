"""CRM de leads (Google Sheets + aviso ao vendedor via Twilio)"""

from .lead_extraction import extract_lead_data
from .notifier import SellerNotifier
from .scoring import calculate_score, classify_lead
from .service import LeadService
from .sheets_store import SheetsLeadStore

__all__ = [
    "extract_lead_data",
    "calculate_score",
    "classify_lead",
    "SellerNotifier",
    "SheetsLeadStore",
    "LeadService",
]
