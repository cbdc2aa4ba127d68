"""sensitive-scan — PII, secret and confidentiality detection with risk scoring."""

from .detector import Detector, DetectorConfig, detect, redact
from .masking import mask
from .middleware import ScanMiddleware, MessageReport
from .config import create_detector, load_config, load_from_yaml
from .errors import SensitiveScanError, RegistryError, ConfigError
from .scoring import BLOCK_THRESHOLD, STRUCTURED_WEIGHTS, KEYWORD_WEIGHTS, EMAIL_WEIGHT
from .types import (
    AcceptedFinding, DetectionRule, KeywordRule, Priority, RawMatch, ScanResult, Severity,
)

__all__ = [
    "Detector", "DetectorConfig", "detect", "redact",
    "mask",
    "ScanMiddleware", "MessageReport",
    "create_detector", "load_config", "load_from_yaml",
    "SensitiveScanError", "RegistryError", "ConfigError",
    "BLOCK_THRESHOLD", "STRUCTURED_WEIGHTS", "KEYWORD_WEIGHTS", "EMAIL_WEIGHT",
    "AcceptedFinding", "DetectionRule", "KeywordRule", "Priority", "RawMatch",
    "ScanResult", "Severity",
]
__version__ = "0.1.0"
