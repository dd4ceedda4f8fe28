"""Error types raised by Insight Miner"""
from typing import Optional


class InsightMinerError(Exception):
    """Base class for all Insight Miner errors"""


class ConfigurationError(InsightMinerError):
    """Required configuration is missing or invalid; fatal at startup"""


class PlatformError(InsightMinerError):
    """The analytics platform could not be reached or rejected a request"""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(InsightMinerError):
    """The completion text could not be turned into a chart plan"""
    
    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class CompositionError(InsightMinerError):
    """A dashboard could not be assembled from a chart plan"""
