"""ngmap: structural reports for Angular source trees."""

from .models import AnalysisResult
from .orchestrator import Orchestrator

__all__ = ["AnalysisResult", "Orchestrator"]
