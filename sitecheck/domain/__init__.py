"""Domain objects for sitecheck - explicit re-exports to satisfy linters."""
from .check_outcome import CheckOutcome as CheckOutcome
from .check_outcome import Failure as Failure
from .check_outcome import Success as Success
from .check_settings import CheckSettings as CheckSettings
from .http_response import HttpResponse as HttpResponse

__all__ = ["CheckOutcome", "Failure", "Success", "CheckSettings", "HttpResponse"]
